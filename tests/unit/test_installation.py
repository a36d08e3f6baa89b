"""Unit tests for the installation surface and factory"""

import pytest
from pydantic import ValidationError

from auth_capabilities.core.capabilities import (
    AuthCapabilities,
    ConfigurationError,
    ContractViolationError,
    InstallationConfig,
    UnknownCapabilityError,
    UnknownProviderError,
    bootstrap,
    get_auth_capabilities,
    install_from_config,
    reset_auth_capabilities,
)

LOGIN = "identityPassword:login"
REGISTER = "identityPassword:register"


@pytest.fixture
def config(feature_factory):
    return {
        "default": "fb",
        "providers": {
            "fb": {
                "features": {LOGIN: feature_factory("fb")},
                "credentials": {"apiKey": "fb-key", "projectId": "demo"},
            },
            "sb": {
                "features": {LOGIN: feature_factory("sb"), REGISTER: feature_factory("sb")},
            },
        },
    }


@pytest.mark.unit
class TestInstallFromConfig:
    """Test bootstrap configuration"""

    def test_installs_all_providers(self, registry, config):
        """Happy path: every provider installed, default set, credentials kept"""
        install_from_config(config, registry)

        assert registry.list_providers() == ["fb", "sb"]
        assert registry.default_provider_id == "fb"
        assert registry.get("fb").init_data == {"apiKey": "fb-key", "projectId": "demo"}
        assert registry.get("sb").init_data is None

    def test_implementations_kept_by_identity(self, registry, config):
        install_from_config(config, registry)

        assert registry.lookup("fb", LOGIN) is config["providers"]["fb"]["features"][LOGIN]

    def test_accepts_model(self, registry, config):
        model = InstallationConfig.model_validate(config)

        assert install_from_config(model, registry) is model

    def test_default_override(self, registry, config):
        install_from_config(config, registry, default="sb")

        assert registry.default_provider_id == "sb"

    def test_unknown_default_fails_at_bootstrap(self, registry, config):
        """Bad input: default names no installed provider"""
        config["default"] = "auth0"

        with pytest.raises(UnknownProviderError) as exc_info:
            install_from_config(config, registry)

        assert isinstance(exc_info.value, ConfigurationError)
        assert registry.default_provider_id is None
        assert registry.list_providers() == []

    def test_unknown_capability_key(self, registry, config, feature_factory):
        config["providers"]["sb"]["features"]["identityPassword:regster"] = feature_factory("sb")

        with pytest.raises(UnknownCapabilityError):
            install_from_config(config, registry)

        assert registry.list_providers() == []
        assert registry.default_provider_id is None

    def test_malformed_config(self, registry):
        """Bad input: missing default"""
        with pytest.raises(ValidationError):
            install_from_config({"providers": {}}, registry)

    def test_empty_provider_id(self, registry):
        with pytest.raises(ValidationError):
            install_from_config({"default": "x", "providers": {"": {"features": {}}}}, registry)


@pytest.mark.unit
class TestAuthCapabilities:
    """Test the facade"""

    def test_use_calls_implementation(self, config):
        auth = AuthCapabilities()
        auth.install_from_config(config)

        login = auth.use(LOGIN)

        assert login.provider == "fb"
        assert auth.use(LOGIN, provider="sb").provider == "sb"

    def test_check_results(self):
        auth = AuthCapabilities(check_results=True)
        auth.install_from_config({
            "default": "fb",
            "providers": {"fb": {"features": {"session:logout": lambda: {"loading": False}}}},
        })

        with pytest.raises(ContractViolationError):
            auth.use("session:logout")

    def test_without_contracts(self, feature_factory):
        auth = AuthCapabilities(contracts=None)
        auth.install_from_config({
            "default": "fb",
            "providers": {"fb": {"features": {"login": feature_factory("fb")}}},
        })

        assert auth.use("login").provider == "fb"
        assert auth.contracts is None

    def test_reset(self, config):
        auth = AuthCapabilities()
        auth.install_from_config(config)

        auth.reset()

        assert auth.registry.list_providers() == []


@pytest.mark.unit
class TestGlobalInstance:
    """Test process-wide instance lifecycle"""

    def test_cached(self):
        assert get_auth_capabilities() is get_auth_capabilities()

    def test_reset(self, config):
        first = bootstrap(config)

        reset_auth_capabilities()

        assert first.registry.list_providers() == []
        assert get_auth_capabilities() is not first

    def test_bootstrap_uses_settings_default(self, monkeypatch, config):
        monkeypatch.setenv("AUTH_CAPABILITIES_DEFAULT_PROVIDER", "sb")

        auth = bootstrap(config)

        assert auth.current() == "sb"

    def test_validation_disabled_by_settings(self, monkeypatch, feature_factory):
        monkeypatch.setenv("AUTH_CAPABILITIES_VALIDATE_FEATURES", "false")

        auth = bootstrap({
            "default": "fb",
            "providers": {"fb": {"features": {"login": feature_factory("fb")}}},
        })

        assert auth.contracts is None
        assert auth.use("login").provider == "fb"

    def test_check_results_from_settings(self, monkeypatch):
        monkeypatch.setenv("AUTH_CAPABILITIES_CHECK_RESULTS", "true")

        assert get_auth_capabilities().check_results is True


@pytest.mark.unit
class TestAtomicBootstrap:
    """A failed bootstrap installs nothing"""

    def test_invalid_implementation_installs_nothing(self, registry, config):
        config["providers"]["sb"]["features"][REGISTER] = "not-callable"

        with pytest.raises(ConfigurationError):
            install_from_config(config, registry)

        assert registry.list_providers() == []

    def test_existing_providers_untouched(self, registry, config, feature_factory):
        original = feature_factory("fb-original")
        install_from_config(
            {"default": "fb", "providers": {"fb": {"features": {LOGIN: original}}}}, registry
        )
        config["providers"]["sb"]["features"]["identityPassword:regster"] = feature_factory("sb")

        with pytest.raises(UnknownCapabilityError):
            install_from_config(config, registry)

        assert registry.list_providers() == ["fb"]
        assert registry.lookup("fb", LOGIN) is original

    def test_default_may_name_installed_provider(self, registry, config, feature_factory):
        """Staged setup: the default may come from an earlier install"""
        install_from_config(
            {"default": "auth0", "providers": {"auth0": {"features": {}}}}, registry
        )
        config["default"] = "auth0"

        install_from_config(config, registry)

        assert registry.default_provider_id == "auth0"
        assert registry.list_providers() == ["auth0", "fb", "sb"]
