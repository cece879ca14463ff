"""Security group for the serverless cache."""

import pulumi
import pulumi_aws


def create_cache_security_group(
    resource_prefix: str,
    vpc_id: str,
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.ec2.SecurityGroup:
    """Create security group for the cache: no ingress, egress all."""
    name = f"{resource_prefix}-ElastiCache-Security-Group"
    return pulumi_aws.ec2.SecurityGroup(
        name,
        vpc_id=vpc_id,
        description=name,
        egress=[
            pulumi_aws.ec2.SecurityGroupEgressArgs(
                protocol="-1",
                from_port=0,
                to_port=0,
                cidr_blocks=["0.0.0.0/0"],
            ),
        ],
        opts=pulumi.ResourceOptions(provider=aws_provider),
    )
