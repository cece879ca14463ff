"""Runnable scripts for common dev tasks. Use: uv run <script-name>."""

from pathlib import Path
import subprocess
import sys

import jsonschema
import yaml

from cachestack.spec.validator import validate_cache_spec

FIXTURE_DIR = Path("fixtures")


def _run(args: list[str]) -> None:
    """Run a command; exit with its code."""
    sys.exit(subprocess.run(args).returncode)


def lint() -> None:
    """Run ruff check on cachestack and tests."""
    _run([sys.executable, "-m", "ruff", "check", "cachestack", "tests"])


def lint_fix() -> None:
    """Run ruff check --fix on cachestack and tests."""
    _run([sys.executable, "-m", "ruff", "check", "--fix", "cachestack", "tests"])


def format() -> None:
    """Run ruff format on cachestack and tests."""
    _run([sys.executable, "-m", "ruff", "format", "cachestack", "tests"])


def type_check() -> None:
    """Run pyright on cachestack."""
    _run([sys.executable, "-m", "pyright", "cachestack"])


def test() -> None:
    """Run pytest."""
    _run([sys.executable, "-m", "pytest", "tests/", "-v"])


def test_cov() -> None:
    """Run pytest with coverage report."""
    _run(
        [
            sys.executable,
            "-m",
            "pytest",
            "tests/",
            "--cov=cachestack",
            "--cov-report=term-missing",
            "-v",
        ]
    )


def check_fixtures(fixture_dir: Path) -> dict[str, str]:
    """Schema-check every *.yaml under fixture_dir; return {file name: error} for failures."""
    failures: dict[str, str] = {}
    for path in sorted(fixture_dir.glob("*.yaml")):
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
        if not isinstance(document, dict):
            failures[path.name] = "not a mapping"
            continue
        try:
            validate_cache_spec(document)
        except (jsonschema.ValidationError, ValueError) as e:
            failures[path.name] = str(e)
    return failures


def validate_fixtures() -> None:
    """Schema-check fixtures/*.yaml; exit 1 if any fail or none are found."""
    if not any(FIXTURE_DIR.glob("*.yaml")):
        print(f"No fixtures found in {FIXTURE_DIR}/", file=sys.stderr)
        sys.exit(1)
    failures = check_fixtures(FIXTURE_DIR)
    for name, error in failures.items():
        print(f"{name}: {error}", file=sys.stderr)
    if failures:
        print(f"{len(failures)} fixture(s) FAILED", file=sys.stderr)
        sys.exit(1)
    print(f"All fixtures in {FIXTURE_DIR}/ are valid")
