"""Build the deployment plan for one serverless cache, in a fixed order."""

import pulumi
import pulumi_aws

from cachestack.cache.serverless import (
    create_cache_user,
    create_cache_user_group,
    create_serverless_cache,
)
from cachestack.cache.validators import (
    UNSUPPORTED_ENGINE_MESSAGE,
    UNSUPPORTED_ENGINE_VERSION_MESSAGE,
    WEAK_PASSWORD_MESSAGE,
    validate_engine,
    validate_engine_version,
    validate_password,
)
from cachestack.config import CacheStackConfig
from cachestack.encryption.kms import create_cache_kms_key
from cachestack.errors import CacheConfigError, ConfigErrorKind
from cachestack.networking.placement import parse_subnet_placement
from cachestack.networking.security_groups import create_cache_security_group
from cachestack.plan import DeploymentPlan, PlanResult
from cachestack.shared.lookups import lookup_subnet_ids, lookup_vpc


def security_group_export_name(resource_prefix: str) -> str:
    return f"{resource_prefix}-ElastiCache-Security-Group-Id"


def serverless_cache_export_name(resource_prefix: str) -> str:
    return f"{resource_prefix}-ElastiCache-Serverless-Id"


def _fail_with(plan: DeploymentPlan, error: CacheConfigError) -> PlanResult:
    pulumi.log.error(str(error))
    return PlanResult(plan=plan, error=error)


def _fail(plan: DeploymentPlan, kind: ConfigErrorKind, message: str) -> PlanResult:
    return _fail_with(plan, CacheConfigError(kind, message))


def build_cache_plan(
    config: CacheStackConfig,
    aws_provider: pulumi_aws.Provider,
) -> PlanResult:
    """Declare the security group, KMS key, user, user group and serverless cache.

    Validation failures stop the sequence and come back as a failed PlanResult
    holding whatever was declared before the failing check. The engine version
    is checked after the user and user group are declared, so a bad version
    leaves both in the plan.

    Lookup failures (unknown VPC, no subnets of the requested type) raise.
    """
    plan = DeploymentPlan()
    prefix = config.resource_prefix

    vpc = lookup_vpc(config.vpc_id, aws_provider)

    try:
        placement = parse_subnet_placement(config.vpc_subnet_type)
    except CacheConfigError as e:
        return _fail_with(plan, e)
    subnet_ids = lookup_subnet_ids(vpc.id, placement, aws_provider)
    pulumi.log.info(f"Placing cache in {len(subnet_ids)} {placement.value} subnet(s) of {vpc.id}")

    security_group = plan.declare(
        "security_group",
        create_cache_security_group(prefix, vpc.id, aws_provider),
    )
    kms_key = plan.declare("kms_key", create_cache_kms_key(prefix, aws_provider))
    pulumi.log.info(f"Declared security group and KMS key for {prefix}")

    if not validate_password(config.user_password):
        return _fail(plan, ConfigErrorKind.WEAK_PASSWORD, WEAK_PASSWORD_MESSAGE)
    if not validate_engine(config.engine):
        return _fail(plan, ConfigErrorKind.UNSUPPORTED_ENGINE, UNSUPPORTED_ENGINE_MESSAGE)

    user_password = pulumi.Output.secret(config.user_password)
    user = plan.declare(
        "user",
        create_cache_user(
            prefix,
            config.app_name,
            config.engine,
            config.user_name,
            user_password,
            aws_provider,
        ),
    )
    user_group = plan.declare(
        "user_group",
        create_cache_user_group(prefix, config.app_name, config.engine, user, aws_provider),
    )
    pulumi.log.info(f"Declared cache user {config.app_name}-user in group {config.app_name}-user-group")

    if not validate_engine_version(config.engine_version):
        pulumi.log.warn(
            "Engine version rejected after the cache user and user group were declared; "
            "both remain in the plan"
        )
        return _fail(
            plan,
            ConfigErrorKind.UNSUPPORTED_ENGINE_VERSION,
            UNSUPPORTED_ENGINE_VERSION_MESSAGE,
        )

    cache = plan.declare(
        "serverless_cache",
        create_serverless_cache(
            resource_prefix=prefix,
            cache_name=config.cache_name,
            engine=config.engine,
            engine_version=config.engine_version,
            security_group_id=security_group.id,
            subnet_ids=subnet_ids,
            kms_key_id=kms_key.key_id,
            user_group_id=user_group.user_group_id,
            tags={
                "environment": config.deploy_environment,
                "project": config.app_name,
                "owner": config.owner,
            },
            aws_provider=aws_provider,
        ),
    )
    pulumi.log.info(f"Declared serverless cache {config.cache_name} ({config.engine} {config.engine_version})")

    plan.export(security_group_export_name(prefix), security_group.id)
    plan.export(serverless_cache_export_name(prefix), cache.id)
    return PlanResult(plan=plan)
