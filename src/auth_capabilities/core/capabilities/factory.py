"""Auth capabilities factory.

Builds the registry, active-context selector and resolver, and holds the
process-wide instance that accessors resolve through.
"""

import logging
from typing import Any, Callable, ContextManager, Optional, Union

from auth_capabilities.config.settings import get_settings

from .context import ActiveContext
from .contracts import DEFAULT_CONTRACTS, ContractSet, KeyLike
from .installation import InstallationConfig, install_from_config
from .provider import ProviderDescriptor
from .registry import ProviderRegistry
from .resolver import CapabilityResolver

logger = logging.getLogger(__name__)

# Global instance (initialized on first call)
_instance: Optional["AuthCapabilities"] = None


class AuthCapabilities:
    """Registry, active context and resolver bundled behind one object.

    Example:
        auth = AuthCapabilities()
        auth.install_from_config({
            "default": "firebase",
            "providers": {"firebase": {"features": {...}}},
        })

        login = auth.use("identityPassword:login")
        await login.invoke()
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        contracts: Optional[ContractSet] = DEFAULT_CONTRACTS,
        check_results: bool = False,
    ):
        """Initialize capabilities.

        Args:
            registry: Registry to use; a new one is created when omitted
            contracts: Contract set for a new registry (None disables validation)
            check_results: Verify accessor results against their contracts
        """
        self.registry = registry if registry is not None else ProviderRegistry(contracts)
        self.context = ActiveContext(self.registry)
        self.resolver = CapabilityResolver(self.registry, self.context)
        self.check_results = check_results

    @property
    def contracts(self) -> Optional[ContractSet]:
        return self.registry.contracts

    def install(self, descriptor: ProviderDescriptor) -> None:
        self.registry.install(descriptor)

    def set_default(self, provider_id: str) -> None:
        self.registry.set_default(provider_id)

    def get(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self.registry.get(provider_id)

    def install_from_config(
        self, config: Union[InstallationConfig, dict], default: Optional[str] = None
    ) -> InstallationConfig:
        return install_from_config(config, self.registry, default=default)

    def current(self) -> str:
        return self.context.current()

    def with_provider(self, provider_id: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        return self.context.with_provider(provider_id, fn, *args, **kwargs)

    def provider_scope(self, provider_id: str) -> ContextManager[str]:
        return self.context.provider_scope(provider_id)

    def resolve(self, key: KeyLike, provider_id: Optional[str] = None) -> Callable[..., Any]:
        return self.resolver.resolve(key, provider_id)

    def supports(self, key: KeyLike, provider_id: Optional[str] = None) -> bool:
        return self.resolver.supports(key, provider_id)

    def use(self, key: KeyLike, provider: Optional[str] = None) -> Any:
        """Resolve ``key`` and call the implementation with no arguments.

        Raises:
            ContractViolationError: Result checking is enabled and the result
                lacks attributes its contract requires
        """
        result = self.resolve(key, provider)()
        if self.check_results and self.contracts is not None:
            self.contracts.verify_result(key, result)
        return result

    def reset(self) -> None:
        self.registry.reset()


def get_auth_capabilities() -> AuthCapabilities:
    """Get the process-wide AuthCapabilities instance.

    Validation behaviour comes from settings:
    - AUTH_CAPABILITIES_VALIDATE_FEATURES: validate feature maps on install
    - AUTH_CAPABILITIES_CHECK_RESULTS: verify accessor results

    Returns:
        Shared AuthCapabilities instance
    """
    global _instance

    # Return cached instance
    if _instance is not None:
        return _instance

    settings = get_settings()
    contracts = DEFAULT_CONTRACTS if settings.validate_features else None
    if contracts is None:
        logger.warning("Capability validation disabled; feature keys are not checked on install")

    _instance = AuthCapabilities(
        registry=ProviderRegistry(contracts),
        check_results=settings.check_results,
    )
    logger.info(f"Auth capabilities initialized for {settings.service_name}")
    return _instance


def bootstrap(config: Union[InstallationConfig, dict]) -> AuthCapabilities:
    """Install providers into the process-wide instance.

    AUTH_CAPABILITIES_DEFAULT_PROVIDER, when set, takes precedence over the
    config's ``default``.
    """
    auth = get_auth_capabilities()
    auth.install_from_config(config, default=get_settings().default_provider)
    return auth


def reset_auth_capabilities() -> None:
    """Reset the global instance (for testing)."""
    global _instance
    if _instance is not None:
        _instance.reset()
    _instance = None
