"""
Pytest configuration and fixtures for auth capability tests.

Provides fixtures for:
- Resetting the process-wide instance and cached settings
- Fake capability implementations with contract-shaped results
- Registries with and without contract validation
"""

from typing import Any, Callable

import pytest

from auth_capabilities.config.settings import get_settings
from auth_capabilities.core.capabilities import (
    DEFAULT_CONTRACTS,
    ActiveContext,
    CapabilityResolver,
    ProviderRegistry,
    reset_auth_capabilities,
)


class FakeFormFeature:
    """Result shape shared by the identity/password form contracts."""

    def __init__(self, provider: str):
        self.provider = provider
        self.form = {"identity": "", "password": ""}
        self.loading = False
        self.validation_errors: dict[str, str] = {}
        self.request_error = None
        self.calls = 0

    async def invoke(self) -> str:
        self.calls += 1
        return self.provider


class FakeErrorHandler:
    def __init__(self, provider: str):
        self.provider = provider

    def handle(self, error: Exception) -> dict[str, Any]:
        return {"provider": self.provider, "message": str(error)}


def make_form_feature(provider: str) -> Callable[[], FakeFormFeature]:
    """Build a zero-argument implementation tagged with its provider."""

    def use_feature() -> FakeFormFeature:
        return FakeFormFeature(provider)

    return use_feature


@pytest.fixture(autouse=True)
def reset_global_state():
    """Isolate the process-wide instance and settings cache per test."""
    reset_auth_capabilities()
    get_settings.cache_clear()
    yield
    reset_auth_capabilities()
    get_settings.cache_clear()


@pytest.fixture
def registry():
    """Registry validating against the default contract set"""
    return ProviderRegistry(DEFAULT_CONTRACTS)


@pytest.fixture
def plain_registry():
    """Registry without contract validation (free-form capability keys)"""
    return ProviderRegistry()


@pytest.fixture
def context(registry):
    return ActiveContext(registry)


@pytest.fixture
def resolver(registry, context):
    return CapabilityResolver(registry, context)


@pytest.fixture
def feature_factory():
    """Factory fixture: ``feature_factory("firebase")`` -> implementation"""
    return make_form_feature


@pytest.fixture
def error_handler_factory():
    def build(provider: str) -> Callable[[], FakeErrorHandler]:
        def use_error_handler() -> FakeErrorHandler:
            return FakeErrorHandler(provider)

        return use_error_handler

    return build
