"""
Cachestack CLI: setup, validate, create, list, destroy.
Run `cachestack setup` once; then `cachestack create <cache.yaml>` and friends.
"""

import os
from pathlib import Path
import subprocess
import sys
from typing import Any

import yaml

from cachestack.cache.validators import (
    UNSUPPORTED_ENGINE_MESSAGE,
    UNSUPPORTED_ENGINE_VERSION_MESSAGE,
    WEAK_PASSWORD_MESSAGE,
    validate_engine,
    validate_engine_version,
    validate_password,
)
from cachestack.config import MANAGED_TAG, password_env_name, read_cache_document
from cachestack.errors import CacheConfigError, ConfigErrorKind
from cachestack.networking.placement import parse_subnet_placement

CONFIG_DIR = ".cachestack"
CONFIG_FILENAME = "config.yaml"
TAG_SERVICE = "service"
DEFAULT_STACK_PREFIX = "dev"
KMS_SECRETS_PROVIDER_TEMPLATE = "awskms://alias/pulumi_backend_software?region={region}"
PROGRAM_DIR = "cachestack"


def _project_root() -> Path:
    return Path.cwd()


def _config_path() -> Path:
    return _project_root() / CONFIG_DIR / CONFIG_FILENAME


def _load_config() -> dict[str, Any] | None:
    path = _config_path()
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else None


def _save_config(backend_url: str, region: str, stack_prefix: str = DEFAULT_STACK_PREFIX) -> None:
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {
                "backend_url": backend_url,
                "region": region,
                "stack_prefix": stack_prefix,
            },
            f,
            default_flow_style=False,
        )
    print(f"Configuration saved to {path}")


def _require_config() -> dict[str, Any]:
    config = _load_config()
    if not config or not config.get("backend_url") or not config.get("region"):
        print("Configuration missing or incomplete. Run: cachestack setup", file=sys.stderr)
        sys.exit(1)
    return config


def _check_aws_credentials() -> bool:
    try:
        subprocess.run(
            ["aws", "sts", "get-caller-identity"],
            capture_output=True,
            check=True,
            timeout=10,
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
        return False


def _run(cmd: list[str], env: dict[str, str] | None = None, check: bool = True) -> subprocess.CompletedProcess:
    full_env = os.environ.copy()
    if env:
        full_env.update(env)
    return subprocess.run(
        cmd,
        cwd=_project_root(),
        env=full_env,
        check=check,
    )


def _pulumi(*args: str) -> list[str]:
    return [sys.executable, "-m", "pulumi", *args, "-C", PROGRAM_DIR]


def _stack_name(app_name: str, config: dict[str, Any]) -> str:
    prefix = config.get("stack_prefix", DEFAULT_STACK_PREFIX)
    region = config["region"]
    return f"{prefix}.{app_name}.{region}"


def _resolve_path(cache_yaml_path: str) -> Path:
    path = Path(cache_yaml_path)
    if not path.is_absolute():
        path = _project_root() / path
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        sys.exit(1)
    return path


def _require_program_dir() -> None:
    if not (_project_root() / PROGRAM_DIR / "Pulumi.yaml").exists():
        print(f"{PROGRAM_DIR}/Pulumi.yaml not found. Run this from the cachestack repo root.", file=sys.stderr)
        sys.exit(1)


def check_cache_document(document: dict[str, Any], password: str | None) -> list[CacheConfigError]:
    """Run the subnet type classifier and the three predicates; return every failure.

    No AWS calls. A missing password is reported as a weak one.
    """
    spec = document["spec"]
    errors: list[CacheConfigError] = []
    try:
        parse_subnet_placement(spec["network"]["subnetType"])
    except CacheConfigError as e:
        errors.append(e)
    if not password or not validate_password(password):
        errors.append(CacheConfigError(ConfigErrorKind.WEAK_PASSWORD, WEAK_PASSWORD_MESSAGE))
    if not validate_engine(spec["engine"]):
        errors.append(CacheConfigError(ConfigErrorKind.UNSUPPORTED_ENGINE, UNSUPPORTED_ENGINE_MESSAGE))
    if not validate_engine_version(str(spec["engineVersion"])):
        errors.append(
            CacheConfigError(ConfigErrorKind.UNSUPPORTED_ENGINE_VERSION, UNSUPPORTED_ENGINE_VERSION_MESSAGE)
        )
    return errors


# --- setup ---


def _cmd_setup() -> None:
    print("First-time setup. You will need:")
    print("  1) AWS credentials (e.g. run: aws sso login)")
    print("  2) S3 URI for infrastructure state (e.g. s3://your-account-pulumi-backend-software)")
    print("  3) Default AWS region (e.g. us-west-2)")
    print()

    if not _check_aws_credentials():
        print("AWS credentials not found. Log in (e.g. aws sso login) and try again.", file=sys.stderr)
        sys.exit(1)
    print("AWS credentials OK.")

    backend_url = os.environ.get("CACHESTACK_BACKEND_URL", "").strip()
    if not backend_url:
        backend_url = input("S3 URI for infrastructure state: ").strip()
    if not backend_url:
        print("Backend URL is required.", file=sys.stderr)
        sys.exit(1)

    region = os.environ.get("CACHESTACK_REGION", "").strip()
    if not region:
        region = input("Default AWS region (e.g. us-west-2): ").strip()
    if not region:
        print("Region is required.", file=sys.stderr)
        sys.exit(1)

    stack_prefix = os.environ.get("CACHESTACK_STACK_PREFIX", DEFAULT_STACK_PREFIX).strip() or DEFAULT_STACK_PREFIX
    _save_config(backend_url, region, stack_prefix)
    print("Setup complete. You can now use: cachestack validate, create, list, destroy")


# --- validate ---


def _cmd_validate(cache_yaml_path: str) -> None:
    path = _resolve_path(cache_yaml_path)
    document = read_cache_document(str(path))
    env_name = password_env_name(document)
    errors = check_cache_document(document, os.environ.get(env_name))
    if errors:
        for e in errors:
            print(f"  {e}", file=sys.stderr)
        print(f"{len(errors)} check(s) FAILED for {path}", file=sys.stderr)
        sys.exit(1)
    print(f"{path} is valid (cache {document['metadata']['name']})")


# --- list ---


def _cmd_list() -> None:
    import boto3

    config = _load_config()
    region = config.get("region") if config else os.environ.get("AWS_REGION", "us-west-2")
    client = boto3.client("resourcegroupstaggingapi", region_name=region)
    caches: dict[str, list[dict[str, str]]] = {}

    paginator = client.get_paginator("get_resources")
    for page in paginator.paginate(
        TagFilters=[{"Key": MANAGED_TAG, "Values": ["true"]}],
        ResourcesPerPage=100,
    ):
        for r in page.get("ResourceTagList", []):
            arn = r.get("ResourceARN", "")
            tags = {t["Key"]: t["Value"] for t in r.get("Tags", [])}
            app = tags.get(TAG_SERVICE, "?")
            resource_type = arn.split(":")[2] if ":" in arn else "resource"
            caches.setdefault(app, []).append({"arn": arn, "type": resource_type})

    if not caches:
        print("No cachestack-managed resources found.")
        return
    for name in sorted(caches):
        print(f"\n{name}")
        for r in caches[name]:
            print(f"  {r['type']}: {r['arn']}")


# --- create ---


def _cmd_create(cache_yaml_path: str) -> None:
    config = _require_config()
    path = _resolve_path(cache_yaml_path)
    document = read_cache_document(str(path))
    app_name = document["metadata"]["name"]
    stack = _stack_name(app_name, config)
    region = config["region"]
    _require_program_dir()

    env = {
        "CACHE_YAML_PATH": str(path.resolve()),
        "PULUMI_BACKEND_URL": config["backend_url"],
    }
    select = _run(_pulumi("stack", "select", stack), env=env, check=False)
    if select.returncode != 0:
        kms = KMS_SECRETS_PROVIDER_TEMPLATE.format(region=region)
        _run(_pulumi("stack", "init", stack, "--secrets-provider", kms), env=env)
    _run(_pulumi("config", "set", "aws:region", region), env=env)
    print(f"Provisioning serverless cache '{app_name}'...")
    _run(_pulumi("up", "-y"), env=env)
    print(f"Cache '{app_name}' provisioned (stack {stack}).")


# --- destroy ---


def _cmd_destroy(app_name: str) -> None:
    config = _require_config()
    stack = _stack_name(app_name, config)
    _require_program_dir()

    env = {"PULUMI_BACKEND_URL": config["backend_url"]}
    select = _run(_pulumi("stack", "select", stack), env=env, check=False)
    if select.returncode != 0:
        print(f"No infrastructure found for cache '{app_name}' (stack {stack}).", file=sys.stderr)
        sys.exit(1)
    confirm = input(f"This will remove the cache '{app_name}' and its user, key and security group. Continue? [y/N]: ")
    if confirm.strip().lower() != "y":
        print("Cancelled.")
        sys.exit(0)
    _run(_pulumi("destroy", "-y"), env=env)
    rm = _run(_pulumi("stack", "rm", stack, "--yes"), env=env, check=False)
    if rm.returncode != 0:
        print(f"Stack {stack} could not be removed; it may already be gone.", file=sys.stderr)
    print(f"Cache '{app_name}' removed.")


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Manage serverless cache infrastructure. Run 'cachestack setup' first."
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("setup", help="One-time setup: AWS, state storage, region")
    validate_p = sub.add_parser("validate", help="Check a cache.yaml offline (no AWS calls)")
    validate_p.add_argument("cache_yaml", help="Path to cache.yaml")
    sub.add_parser("list", help="List cachestack-managed resources by cache")
    create_p = sub.add_parser("create", help="Provision a serverless cache from a cache.yaml")
    create_p.add_argument("cache_yaml", help="Path to cache.yaml")
    destroy_p = sub.add_parser("destroy", help="Remove all infrastructure for a cache")
    destroy_p.add_argument("app_name", help="Cache name (from cache.yaml metadata.name)")
    args = parser.parse_args()

    if args.command == "setup":
        _cmd_setup()
    elif args.command == "validate":
        _cmd_validate(args.cache_yaml)
    elif args.command == "list":
        _cmd_list()
    elif args.command == "create":
        _cmd_create(args.cache_yaml)
    elif args.command == "destroy":
        _cmd_destroy(args.app_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
