"""Deployment plan accumulator and the result of building one."""

from dataclasses import dataclass, field
from typing import Any

from cachestack.errors import CacheConfigError, ConfigErrorKind


@dataclass
class DeploymentPlan:
    """Resources declared so far, in declaration order, plus the stack exports."""

    _resources: dict[str, Any] = field(default_factory=dict)
    _exports: dict[str, Any] = field(default_factory=dict)

    def declare(self, key: str, resource: Any) -> Any:
        """Record a declared resource under key and return it."""
        if key in self._resources:
            raise RuntimeError(f"resource already declared: {key!r}")
        self._resources[key] = resource
        return resource

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a declared resource; return default if key is missing."""
        return self._resources.get(key, default)

    def require(self, key: str) -> Any:
        """Retrieve a declared resource; raise RuntimeError with declared keys if missing."""
        if key not in self._resources:
            declared = ", ".join(self._resources) or "(none)"
            raise RuntimeError(f"missing required resource: {key!r}. Declared: {declared}")
        return self._resources[key]

    def export(self, key: str, value: Any) -> None:
        """Register a Pulumi stack export."""
        self._exports[key] = value

    @property
    def declared(self) -> list[str]:
        """Keys of declared resources, in declaration order."""
        return list(self._resources)

    @property
    def resources(self) -> dict[str, Any]:
        return dict(self._resources)

    @property
    def exports(self) -> dict[str, Any]:
        """Return all registered Pulumi exports."""
        return dict(self._exports)


@dataclass(frozen=True)
class PlanResult:
    """Outcome of building a plan: the plan so far, and the error that stopped it, if any."""

    plan: DeploymentPlan
    error: CacheConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ConfigErrorKind | None:
        return self.error.kind if self.error else None

    def unwrap(self) -> DeploymentPlan:
        """Return the plan, or raise the error that stopped it."""
        if self.error is not None:
            raise self.error
        return self.plan
