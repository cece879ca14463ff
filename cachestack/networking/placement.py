"""Subnet placement categories and their parsing."""

from enum import Enum

from cachestack.errors import CacheConfigError, ConfigErrorKind


class SubnetPlacement(Enum):
    """Kind of subnet a cache is placed into. Value is the subnet `network` tag."""

    PUBLIC = "public"
    PRIVATE = "private"
    ISOLATED = "isolated"


def parse_subnet_placement(value: str) -> SubnetPlacement:
    """Map a category name to a SubnetPlacement (case-sensitive).

    Raises:
        CacheConfigError: kind UNRECOGNIZED_PLACEMENT_CATEGORY for unknown names.
    """
    for placement in SubnetPlacement:
        if placement.value == value:
            return placement
    allowed = ", ".join(p.value for p in SubnetPlacement)
    raise CacheConfigError(
        ConfigErrorKind.UNRECOGNIZED_PLACEMENT_CATEGORY,
        f"Unrecognized subnet type {value!r}. Supported types are {allowed}.",
    )
