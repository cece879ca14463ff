"""cache.yaml configuration loading."""

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

import jsonschema
import pulumi
import pulumi_aws
import yaml

from cachestack.spec.validator import validate_cache_spec

DEFAULT_PASSWORD_ENV = "CACHE_USER_PASSWORD"
MANAGED_TAG = "cachestack-managed"


@dataclass(frozen=True)
class CacheStackConfig:
    """Everything needed to declare one serverless cache. Never mutated after load."""

    resource_prefix: str
    deploy_region: str | None
    deploy_environment: str
    app_name: str
    vpc_subnet_type: str
    owner: str
    vpc_id: str
    engine: str
    engine_version: str
    user_name: str
    user_password: str = field(repr=False)

    @property
    def cache_name(self) -> str:
        return f"{self.app_name}-{self.deploy_environment}"

    @classmethod
    def from_dict(cls, document: dict[str, Any], password: str, region: str | None = None) -> "CacheStackConfig":
        """Build the config from a schema-valid cache.yaml document.

        The password is passed separately; it never lives in the YAML file.
        spec.region wins over the region argument when both are set.
        """
        metadata = document["metadata"]
        spec = document["spec"]
        network = spec["network"]
        return cls(
            resource_prefix=spec["resourcePrefix"],
            deploy_region=spec.get("region") or region,
            deploy_environment=spec["environment"],
            app_name=metadata["name"],
            vpc_subnet_type=network["subnetType"],
            owner=spec["owner"],
            vpc_id=network["vpcId"],
            engine=spec["engine"],
            # YAML reads `engineVersion: 8` as an int
            engine_version=str(spec["engineVersion"]),
            user_name=spec["user"]["userName"],
            user_password=password,
        )

    @classmethod
    def from_file(cls, path: str) -> "CacheStackConfig":
        """Load and validate cache.yaml; read the user password from the environment."""
        document = read_cache_document(path)
        env_name = password_env_name(document)
        password = os.environ.get(env_name)
        if not password:
            raise SystemExit(f"{env_name} environment variable required (cache user password)")
        region = pulumi.Config("aws").get("region")
        return cls.from_dict(document, password, region=region)


def read_cache_document(path: str) -> dict[str, Any]:
    """Read cache.yaml and check it against its schema. Exits on any failure."""
    if not Path(path).exists():
        raise SystemExit(f"cache.yaml not found: {path}")

    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f)
    if not isinstance(document, dict):
        raise SystemExit(f"cache.yaml must be a mapping: {path}")

    try:
        validate_cache_spec(document)
    except (jsonschema.ValidationError, ValueError) as e:
        raise SystemExit(str(e)) from e
    return document


def password_env_name(document: dict[str, Any]) -> str:
    """Name of the environment variable holding the cache user password."""
    return document["spec"]["user"].get("passwordEnv", DEFAULT_PASSWORD_ENV)


def load_cache_config() -> CacheStackConfig:
    """Load cache.yaml from CACHE_YAML_PATH environment variable."""
    path = os.environ.get("CACHE_YAML_PATH")
    if not path:
        raise SystemExit("CACHE_YAML_PATH environment variable required")
    if not Path(path).exists():
        raise SystemExit("CACHE_YAML_PATH must point to cache.yaml")
    return CacheStackConfig.from_file(path)


def create_aws_provider(app_name: str, region: str | None) -> pulumi_aws.Provider:
    """Create AWS provider with default resource tags."""
    return pulumi_aws.Provider(
        "aws-tagged",
        region=region,
        default_tags=pulumi_aws.ProviderDefaultTagsArgs(
            tags={
                "service": app_name,
                MANAGED_TAG: "true",
            }
        ),
    )
