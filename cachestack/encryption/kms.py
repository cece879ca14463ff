"""KMS key used to encrypt the serverless cache at rest."""

import pulumi
import pulumi_aws


def create_cache_kms_key(
    resource_prefix: str,
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.kms.Key:
    """Create a customer managed KMS key with yearly rotation enabled."""
    name = f"{resource_prefix}-KMS-Key"
    return pulumi_aws.kms.Key(
        name,
        description=name,
        enable_key_rotation=True,
        opts=pulumi.ResourceOptions(provider=aws_provider),
    )
