"""Installation surface.

Bootstrap code describes every provider in one configuration object:

    {
        "default": "firebase",
        "providers": {
            "firebase": {
                "features": {"identityPassword:login": use_firebase_login},
                "credentials": {"apiKey": "..."},
            },
            "supabase": {
                "features": {"identityPassword:login": use_supabase_login},
            },
        },
    }
"""

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import UnknownProviderError
from .provider import ProviderDescriptor
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """Feature bindings and optional credentials for one provider."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Values are validated against the contract set on install, not here
    features: dict[Any, Any] = Field(default_factory=dict)
    credentials: Optional[Any] = None


class InstallationConfig(BaseModel):
    """Complete provider configuration with the default provider id."""

    default: str = Field(..., min_length=1)
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)

    @field_validator("providers")
    @classmethod
    def validate_provider_ids(cls, v):
        """Provider ids must be non-empty"""
        for provider_id in v:
            if not provider_id:
                raise ValueError("Provider ids must be non-empty strings")
        return v

    def descriptors(self) -> list[ProviderDescriptor]:
        return [
            ProviderDescriptor(
                id=provider_id,
                features=provider.features,
                init_data=provider.credentials,
            )
            for provider_id, provider in self.providers.items()
        ]


def install_from_config(
    config: Union[InstallationConfig, dict],
    registry: ProviderRegistry,
    default: Optional[str] = None,
) -> InstallationConfig:
    """Install every configured provider and set the default.

    Args:
        config: Installation config, as a model or a plain dict
        registry: Registry to populate
        default: Provider id overriding ``config.default`` (e.g. from settings)

    Returns:
        The validated InstallationConfig

    Raises:
        pydantic.ValidationError: Config is structurally malformed
        UnknownProviderError: Default provider is not installed afterwards
        UnknownCapabilityError: A feature key is outside the contract set
        InvalidImplementationError: A feature cannot satisfy its contract
    """
    if not isinstance(config, InstallationConfig):
        config = InstallationConfig.model_validate(config)

    descriptors = config.descriptors()
    default_id = default or config.default

    # Everything is checked before the first install so a failed bootstrap
    # leaves the registry untouched
    if registry.contracts is not None:
        for descriptor in descriptors:
            registry.contracts.validate_features(descriptor.features, descriptor.id)

    if default_id not in config.providers and not registry.has_provider(default_id):
        available = sorted(set(config.providers) | set(registry.list_providers()))
        raise UnknownProviderError(default_id, available)

    if default and default != config.default:
        logger.info(f"Default provider overridden: {config.default} -> {default}")

    for descriptor in descriptors:
        registry.install(descriptor)
    registry.set_default(default_id)
    return config
