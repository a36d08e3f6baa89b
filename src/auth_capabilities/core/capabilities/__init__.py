"""Authentication capability registry and resolution.

Providers (firebase, supabase, ...) bind implementations to capability keys:
- contracts: the closed catalogue of keys and their shapes
- registry: installed providers and the default provider id
- context: scoped override of the active provider
- resolver: key + provider -> implementation
- accessors: zero-argument consumption surface for application code
"""

from .contracts import CapabilityKey, Contract, ContractSet, DEFAULT_CONTRACTS
from .errors import (
    CapabilityError,
    ConfigurationError,
    ContractViolationError,
    InvalidImplementationError,
    MissingCapabilityError,
    UnknownCapabilityError,
    UnknownProviderError,
)
from .provider import ProviderDescriptor
from .registry import ProviderRegistry
from .context import ActiveContext
from .resolver import CapabilityResolver
from .installation import InstallationConfig, ProviderConfig, install_from_config
from .factory import AuthCapabilities, bootstrap, get_auth_capabilities, reset_auth_capabilities

__all__ = [
    "ActiveContext",
    "AuthCapabilities",
    "CapabilityError",
    "CapabilityKey",
    "CapabilityResolver",
    "ConfigurationError",
    "Contract",
    "ContractSet",
    "ContractViolationError",
    "DEFAULT_CONTRACTS",
    "InstallationConfig",
    "InvalidImplementationError",
    "MissingCapabilityError",
    "ProviderConfig",
    "ProviderDescriptor",
    "ProviderRegistry",
    "UnknownCapabilityError",
    "UnknownProviderError",
    "bootstrap",
    "get_auth_capabilities",
    "install_from_config",
    "reset_auth_capabilities",
]
