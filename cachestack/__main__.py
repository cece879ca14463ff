"""
Cachestack: provisions one ElastiCache serverless cache from cache.yaml.
Looks up an existing VPC; creates security group, KMS key, cache user and user group,
and the serverless cache. Exports the security group id and cache id.
"""

import pulumi

from cachestack.config import create_aws_provider, load_cache_config
from cachestack.stack import build_cache_plan

config = load_cache_config()
aws_provider = create_aws_provider(config.app_name, config.deploy_region)

result = build_cache_plan(config, aws_provider)
if not result.ok:
    raise SystemExit(str(result.error))

for name, value in result.plan.exports.items():
    pulumi.export(name, value)
