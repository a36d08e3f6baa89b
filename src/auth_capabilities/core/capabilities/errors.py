"""Capability resolution errors.

Configuration bugs (unknown providers, unknown capability keys, malformed
implementations) derive from ConfigurationError and should fail loudly at
bootstrap. MissingCapabilityError is the normal outcome of asking a provider
for an optional capability it does not implement, so it sits outside that
branch and callers can catch it by type.
"""

from typing import Optional


class CapabilityError(Exception):
    """Base class for all capability registry errors."""


class ConfigurationError(CapabilityError):
    """Registry or provider configuration is invalid."""


class UnknownProviderError(ConfigurationError):
    """A provider id was referenced that has never been installed."""

    def __init__(self, provider_id: Optional[str], available: Optional[list[str]] = None):
        self.provider_id = provider_id
        self.available = available or []
        if provider_id is None:
            message = "No provider selected and no default provider configured"
        else:
            listed = ", ".join(self.available) or "none"
            message = f"Unknown provider: {provider_id}. Installed: {listed}"
        super().__init__(message)


class UnknownCapabilityError(ConfigurationError):
    """A capability key outside the contract set was used at install time."""

    def __init__(self, capability_key: str, provider_id: Optional[str] = None):
        self.capability_key = capability_key
        self.provider_id = provider_id
        where = f" (provider '{provider_id}')" if provider_id else ""
        super().__init__(f"Unknown capability key: {capability_key}{where}")


class InvalidImplementationError(ConfigurationError):
    """An implementation cannot satisfy its capability contract."""

    def __init__(self, capability_key: str, reason: str, provider_id: Optional[str] = None):
        self.capability_key = capability_key
        self.provider_id = provider_id
        self.reason = reason
        where = f" in provider '{provider_id}'" if provider_id else ""
        super().__init__(f"Invalid implementation for {capability_key}{where}: {reason}")


class ContractViolationError(ConfigurationError):
    """An implementation produced a result that does not match its contract."""

    def __init__(self, capability_key: str, missing: list[str]):
        self.capability_key = capability_key
        self.missing = missing
        super().__init__(
            f"Result of {capability_key} is missing contract attributes: {', '.join(missing)}"
        )


class MissingCapabilityError(CapabilityError):
    """An installed provider has no binding for the requested capability."""

    def __init__(self, capability_key: str, provider_id: str, optional: bool = False):
        self.capability_key = capability_key
        self.provider_id = provider_id
        self.optional = optional
        super().__init__(
            f"Provider '{provider_id}' does not implement capability: {capability_key}"
        )
