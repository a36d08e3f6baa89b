"""Capability resolver.

Maps a capability key, plus the active or an explicit provider, to the
implementation registered for it.
"""

import logging
from typing import Any, Callable, Optional

from .context import ActiveContext
from .contracts import KeyLike, normalize_key
from .errors import MissingCapabilityError
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class CapabilityResolver:
    """Synchronous lookup of capability implementations.

    Every call performs a fresh lookup and returns the registered object
    itself, so consumers always see the current bindings. No I/O, no retries:
    the returned implementation owns all of that.
    """

    def __init__(self, registry: ProviderRegistry, context: ActiveContext):
        self.registry = registry
        self.context = context

    def resolve(self, key: KeyLike, provider_id: Optional[str] = None) -> Callable[..., Any]:
        """Resolve ``key`` against ``provider_id`` or the active provider.

        Args:
            key: Capability key to resolve
            provider_id: Explicit provider, bypassing the active context

        Returns:
            The implementation exactly as installed

        Raises:
            UnknownProviderError: Target provider is not installed
            MissingCapabilityError: Target provider does not bind ``key``
        """
        # Default and descriptor are read under one lock acquisition
        with self.registry.lock:
            target = provider_id if provider_id is not None else self.context.current()
            implementation = self.registry.lookup(target, key)
        logger.debug(f"Resolved {normalize_key(key)} via provider {target}")
        return implementation

    def supports(self, key: KeyLike, provider_id: Optional[str] = None) -> bool:
        """Return True if the target provider binds ``key``.

        Unknown providers still raise, since they indicate a configuration bug.
        """
        try:
            self.resolve(key, provider_id)
        except MissingCapabilityError:
            return False
        return True
