"""Provider registry.

Process-wide store of installed provider descriptors plus the designated
default provider id.

Usage:
    registry = ProviderRegistry()
    registry.install(ProviderDescriptor("firebase", {"identityPassword:login": use_login}))
    registry.set_default("firebase")

    descriptor = registry.get("firebase")
"""

import logging
import threading
from typing import Any, Callable, Optional

from .contracts import ContractSet, KeyLike, normalize_key
from .errors import MissingCapabilityError, UnknownProviderError
from .provider import ProviderDescriptor

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry of capability providers.

    ``set_default`` only records intent: the default does not have to be
    installed yet, since bootstrap code may install providers in any order.
    Resolution fails with UnknownProviderError if it is still missing then.

    When a contract set is given, descriptors are validated on install so
    that typos in capability keys fail at bootstrap rather than at first use.
    All reads and writes go through a single re-entrant lock.
    """

    def __init__(self, contracts: Optional[ContractSet] = None):
        self.contracts = contracts
        self._providers: dict[str, ProviderDescriptor] = {}
        self._default: Optional[str] = None
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def default_provider_id(self) -> Optional[str]:
        with self._lock:
            return self._default

    def install(self, descriptor: ProviderDescriptor) -> None:
        """Insert or replace the descriptor under ``descriptor.id``.

        Re-installing under an existing id replaces the feature map
        wholesale, it never merges.

        Raises:
            UnknownCapabilityError: Feature key outside the contract set
            InvalidImplementationError: Implementation cannot satisfy its contract
        """
        if self.contracts is not None:
            self.contracts.validate_features(descriptor.features, descriptor.id)

        with self._lock:
            previous = self._providers.get(descriptor.id)
            self._providers[descriptor.id] = descriptor

        if previous is None:
            logger.info(
                f"Installed provider: {descriptor.id} "
                f"({len(descriptor.features)} capabilities)"
            )
        elif previous != descriptor:
            logger.warning(f"Replaced existing provider: {descriptor.id}")

    def uninstall(self, provider_id: str) -> None:
        """Remove a provider.

        The default id is left untouched; resolving against it afterwards
        fails with UnknownProviderError until it is installed again.

        Raises:
            UnknownProviderError: If provider not installed
        """
        with self._lock:
            if provider_id not in self._providers:
                raise UnknownProviderError(provider_id, list(self._providers))
            del self._providers[provider_id]
        logger.info(f"Uninstalled provider: {provider_id}")

    def set_default(self, provider_id: str) -> None:
        with self._lock:
            self._default = provider_id
            installed = provider_id in self._providers
        if installed:
            logger.info(f"Set default provider: {provider_id}")
        else:
            logger.info(f"Set default provider: {provider_id} (not installed yet)")

    def get(self, provider_id: str) -> Optional[ProviderDescriptor]:
        with self._lock:
            return self._providers.get(provider_id)

    def has_provider(self, provider_id: str) -> bool:
        with self._lock:
            return provider_id in self._providers

    def list_providers(self) -> list[str]:
        with self._lock:
            return list(self._providers)

    def lookup(self, provider_id: Optional[str], key: KeyLike) -> Callable[..., Any]:
        """Return the implementation bound to ``key`` in ``provider_id``.

        Descriptor and key are read under the same lock so a concurrent
        re-install cannot be observed half way.

        Raises:
            UnknownProviderError: Provider not installed (or None)
            MissingCapabilityError: Provider does not bind ``key``
        """
        capability_key = normalize_key(key)
        with self._lock:
            descriptor = self._providers.get(provider_id) if provider_id is not None else None
            if descriptor is None:
                raise UnknownProviderError(provider_id, list(self._providers))
            features = descriptor.features

        if capability_key not in features:
            optional = self.contracts is not None and self.contracts.is_optional(capability_key)
            raise MissingCapabilityError(capability_key, descriptor.id, optional=optional)
        return features[capability_key]

    def reset(self) -> None:
        """Remove all providers and the default (for testing)."""
        with self._lock:
            self._providers.clear()
            self._default = None
        logger.info("Cleared all providers")
