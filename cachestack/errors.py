"""Fatal configuration errors raised or returned while building a cache plan."""

from enum import Enum


class ConfigErrorKind(str, Enum):
    """Which configuration constraint failed."""

    UNRECOGNIZED_PLACEMENT_CATEGORY = "UnrecognizedPlacementCategory"
    WEAK_PASSWORD = "WeakPassword"
    UNSUPPORTED_ENGINE = "UnsupportedEngine"
    UNSUPPORTED_ENGINE_VERSION = "UnsupportedEngineVersion"


class CacheConfigError(ValueError):
    """A configuration value failed validation; carries the failed constraint kind."""

    def __init__(self, kind: ConfigErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.args[0]}"
