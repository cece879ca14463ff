"""Tests for subnet placement parsing and CacheConfigError."""

import pytest

from cachestack.errors import CacheConfigError, ConfigErrorKind
from cachestack.networking.placement import SubnetPlacement, parse_subnet_placement


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("public", SubnetPlacement.PUBLIC),
        ("private", SubnetPlacement.PRIVATE),
        ("isolated", SubnetPlacement.ISOLATED),
    ],
)
def test_parse_subnet_placement_recognized(value: str, expected: SubnetPlacement) -> None:
    assert parse_subnet_placement(value) is expected


def test_parse_subnet_placement_is_injective() -> None:
    """Each recognized name maps to a distinct placement."""
    parsed = {parse_subnet_placement(p.value) for p in SubnetPlacement}
    assert len(parsed) == len(SubnetPlacement)


@pytest.mark.parametrize("value", ["Private", "PUBLIC", "private-with-egress", "", " isolated"])
def test_parse_subnet_placement_unrecognized(value: str) -> None:
    """Unknown or differently-cased names fail with UNRECOGNIZED_PLACEMENT_CATEGORY."""
    with pytest.raises(CacheConfigError) as exc_info:
        parse_subnet_placement(value)
    assert exc_info.value.kind is ConfigErrorKind.UNRECOGNIZED_PLACEMENT_CATEGORY
    assert "public, private, isolated" in str(exc_info.value)


def test_cache_config_error_str_includes_kind() -> None:
    err = CacheConfigError(ConfigErrorKind.WEAK_PASSWORD, "too weak")
    assert str(err) == "WeakPassword: too weak"
    assert isinstance(err, ValueError)
