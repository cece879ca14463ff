"""ElastiCache user, user group and serverless cache."""

import pulumi
import pulumi_aws

DAILY_SNAPSHOT_TIME = "00:00"
SNAPSHOT_RETENTION_LIMIT = 2
USER_ACCESS_STRING = "on ~* +@all"


def create_cache_user(
    resource_prefix: str,
    app_name: str,
    engine: str,
    user_name: str,
    password: pulumi.Input[str],
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.elasticache.User:
    """Create the administrative cache user (password auth, full access).

    Pass the password as a secret Output so it stays encrypted in state.
    """
    return pulumi_aws.elasticache.User(
        f"{resource_prefix}-ElastiCache-User",
        user_id=f"{app_name}-user",
        user_name=user_name,
        engine=engine,
        access_string=USER_ACCESS_STRING,
        no_password_required=False,
        passwords=[password],
        opts=pulumi.ResourceOptions(
            provider=aws_provider,
            additional_secret_outputs=["passwords"],
        ),
    )


def create_cache_user_group(
    resource_prefix: str,
    app_name: str,
    engine: str,
    user: pulumi_aws.elasticache.User,
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.elasticache.UserGroup:
    """Create a user group holding only the given user."""
    return pulumi_aws.elasticache.UserGroup(
        f"{resource_prefix}-ElastiCache-User-Group",
        user_group_id=f"{app_name}-user-group",
        engine=engine,
        user_ids=[user.user_id],
        opts=pulumi.ResourceOptions(provider=aws_provider),
    )


def create_serverless_cache(
    resource_prefix: str,
    cache_name: str,
    engine: str,
    engine_version: str,
    security_group_id: pulumi.Output[str],
    subnet_ids: list[str],
    kms_key_id: pulumi.Output[str],
    user_group_id: pulumi.Output[str],
    tags: dict[str, str],
    aws_provider: pulumi_aws.Provider,
) -> pulumi_aws.elasticache.ServerlessCache:
    """Create the serverless cache with daily snapshots kept for two days."""
    name = f"{resource_prefix}-ElastiCache-Serverless"
    return pulumi_aws.elasticache.ServerlessCache(
        name,
        name=cache_name,
        engine=engine,
        major_engine_version=engine_version,
        description=name,
        security_group_ids=[security_group_id],
        subnet_ids=subnet_ids,
        kms_key_id=kms_key_id,
        daily_snapshot_time=DAILY_SNAPSHOT_TIME,
        snapshot_retention_limit=SNAPSHOT_RETENTION_LIMIT,
        user_group_id=user_group_id,
        tags=tags,
        opts=pulumi.ResourceOptions(provider=aws_provider),
    )
