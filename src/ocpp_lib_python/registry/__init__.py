"""功能注册表：按动作名称管理所有已知的 OCPP 功能描述。

Feature registry mapping action names to feature descriptors.

The registry has two phases. During population, ``register`` calls are
made one after another by the process bootstrap. After ``seal()`` the
registry is read-only and any number of threads may read it without
locking. Reads always see a complete snapshot: writes replace the
underlying mapping instead of mutating it.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ocpp_lib_python.errors import (
    DuplicateActionError,
    RegistrySealedError,
    UnknownActionError,
)
from ocpp_lib_python.feature import Feature, FeatureDescriptor
from ocpp_lib_python.telemetry import get_logger

if TYPE_CHECKING:
    from ocpp_lib_python.rules.catalog import RuleCatalog

logger = get_logger("ocpp_lib_python.registry")


class FeatureRegistry:
    """Process-wide catalog of feature descriptors.

    Usage::

        registry = FeatureRegistry()
        registry.register(GET_DIAGNOSTICS.describe(catalog))
        registry.seal()
        registry.lookup("GetDiagnostics").request_type   # GetDiagnosticsRequest
        registry.all_action_names()                      # frozenset({...})

    Dynamic enumeration rules hold a reference to the registry, not a copy
    of its names. A registry that changes after sealing (only possible with
    ``allow_late_registration=True``) can therefore change the outcome of
    validating a payload that was valid before.
    """

    def __init__(self, *, allow_late_registration: bool = False) -> None:
        """Initialize an empty registry.

        Args:
            allow_late_registration: Permit writes after ``seal()``; they are
                serialized and logged as warnings
        """
        self._features: dict[str, FeatureDescriptor] = {}
        self._write_lock = threading.Lock()
        self._sealed = False
        self._allow_late_registration = allow_late_registration

    # ---- population ----------------------------------------------------

    def register(self, descriptor: FeatureDescriptor) -> FeatureRegistry:
        """Register a feature descriptor.

        Args:
            descriptor: Descriptor to add

        Returns:
            Self for chaining

        Raises:
            DuplicateActionError: If the action name is already registered
            RegistrySealedError: If the registry is sealed
        """
        action = descriptor.action_name
        with self._write_lock:
            self._check_writable(action)
            if action in self._features:
                raise DuplicateActionError(action)
            features = dict(self._features)
            features[action] = descriptor
            self._features = features

        logger.debug(
            "Feature registered",
            action=action,
            request=descriptor.request_schema.name,
            confirmation=descriptor.confirmation_schema.name,
        )
        return self

    def unregister(self, action: str) -> bool:
        """Remove a feature.

        Args:
            action: Action name

        Returns:
            True if removed, False if not found

        Raises:
            RegistrySealedError: If the registry is sealed
        """
        with self._write_lock:
            self._check_writable(action)
            if action not in self._features:
                return False
            features = dict(self._features)
            del features[action]
            self._features = features

        logger.debug("Feature unregistered", action=action)
        return True

    def seal(self) -> FeatureRegistry:
        """End the population phase."""
        if not self._sealed:
            self._sealed = True
            logger.info("Feature registry sealed", features=len(self._features))
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_writable(self, action: str) -> None:
        if not self._sealed:
            return
        if not self._allow_late_registration:
            raise RegistrySealedError(action)
        logger.warning(
            "Registry modified after sealing; payloads constrained by dynamic "
            "enumerations may validate differently",
            action=action,
        )

    # ---- queries -------------------------------------------------------

    def lookup(self, action: str) -> FeatureDescriptor:
        """Get the descriptor of an action.

        Raises:
            UnknownActionError: If no feature implements the action
        """
        descriptor = self._features.get(action)
        if descriptor is None:
            raise UnknownActionError(action)
        return descriptor

    def get(self, action: str) -> FeatureDescriptor | None:
        """Get the descriptor of an action, or None."""
        return self._features.get(action)

    def has(self, action: str) -> bool:
        """Check if an action is registered."""
        return action in self._features

    def all_action_names(self) -> frozenset[str]:
        """Snapshot of every registered action name."""
        return frozenset(self._features)

    def descriptors(self) -> tuple[FeatureDescriptor, ...]:
        """Snapshot of every registered descriptor, in registration order."""
        return tuple(self._features.values())

    def __contains__(self, action: object) -> bool:
        return action in self._features

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[FeatureDescriptor]:
        return iter(self.descriptors())


def build_registry(
    features: Iterable[Feature],
    catalog: RuleCatalog,
    *,
    seal: bool = True,
    allow_late_registration: bool = False,
) -> FeatureRegistry:
    """Describe and register features in one initialization step.

    Args:
        features: Feature definitions
        catalog: Rule catalog the feature schemas are bound against
        seal: Seal the registry once populated
        allow_late_registration: Permit writes after sealing

    Returns:
        Populated FeatureRegistry

    Raises:
        InitializationError: On duplicate actions or unknown rules
    """
    registry = FeatureRegistry(allow_late_registration=allow_late_registration)
    for feature in features:
        registry.register(feature.describe(catalog))
    if seal:
        registry.seal()
    return registry


__all__ = [
    "FeatureRegistry",
    "build_registry",
]
