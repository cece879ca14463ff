"""Lookup the existing VPC and the subnets a cache is placed into."""

import pulumi
import pulumi_aws

from cachestack.networking.placement import SubnetPlacement


def lookup_vpc(
    vpc_id: str,
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.ec2.GetVpcResult:
    """Lookup a VPC by id. The provider raises if it does not exist.

    Does not create any resources.
    """
    return pulumi_aws.ec2.get_vpc(
        id=vpc_id,
        opts=pulumi.InvokeOptions(provider=aws_provider),
    )


def lookup_subnet_ids(
    vpc_id: str,
    placement: SubnetPlacement,
    aws_provider: pulumi_aws.Provider,
) -> list[str]:
    """Lookup subnet ids in the VPC tagged network=<placement>."""
    subnets = pulumi_aws.ec2.get_subnets(
        filters=[
            pulumi_aws.ec2.GetSubnetsFilterArgs(name="vpc-id", values=[vpc_id]),
            pulumi_aws.ec2.GetSubnetsFilterArgs(name="tag:network", values=[placement.value]),
        ],
        opts=pulumi.InvokeOptions(provider=aws_provider),
    )
    if not subnets.ids:
        raise SystemExit(f"No {placement.value} subnets found in {vpc_id} (tag network={placement.value})")
    return list(subnets.ids)
