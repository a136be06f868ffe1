"""Root pytest fixtures for ocpp-lib-python tests."""

from __future__ import annotations

import pytest

from ocpp_lib_python import FeatureRegistry, MessageDispatcher, OcppLibConfig, RuleCatalog
from ocpp_lib_python.v16 import build_catalog, build_default_registry


@pytest.fixture
def catalog() -> RuleCatalog:
    """Rule catalog with the built-in and OCPP 1.6 rules."""
    return build_catalog()


@pytest.fixture
def registry(catalog: RuleCatalog) -> FeatureRegistry:
    """Unsealed registry with every OCPP 1.6 feature, so tests may change it."""
    return build_default_registry(OcppLibConfig(), catalog=catalog, seal=False)


@pytest.fixture
def sealed_registry(catalog: RuleCatalog) -> FeatureRegistry:
    """Registry in its steady-state phase."""
    return build_default_registry(OcppLibConfig(), catalog=catalog)


@pytest.fixture
def dispatcher(sealed_registry: FeatureRegistry) -> MessageDispatcher:
    """Dispatcher over the sealed OCPP 1.6 registry."""
    return MessageDispatcher(sealed_registry, config=OcppLibConfig())
