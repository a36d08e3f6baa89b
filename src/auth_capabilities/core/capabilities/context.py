"""Active provider selection.

Tracks which provider unqualified capability requests resolve against. The
override lives in a ContextVar, so it follows the code that set it: nested
overrides unwind in stack order, and coroutines or asyncio tasks started
inside a scope keep seeing that scope's provider.
"""

import functools
import inspect
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator, Optional

from .errors import UnknownProviderError
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class ActiveContext:
    """Selector for the provider that applies to the current scope."""

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry
        # One variable per selector so separate registries never share an override
        self._override: ContextVar[Optional[str]] = ContextVar(
            f"active_auth_provider_{id(self)}", default=None
        )

    def override(self) -> Optional[str]:
        """Return the explicit override for this scope, if any."""
        return self._override.get()

    def current(self) -> str:
        """Return the active provider id.

        Raises:
            UnknownProviderError: No override is set and no default configured
        """
        provider_id = self._override.get()
        if provider_id is None:
            provider_id = self.registry.default_provider_id
        if provider_id is None:
            raise UnknownProviderError(None)
        return provider_id

    @contextmanager
    def provider_scope(self, provider_id: str) -> Iterator[str]:
        """Override the active provider for the body of a ``with`` block.

        The previous value is restored on exit, including on error.
        """
        token = self._override.set(provider_id)
        logger.debug(f"Entered provider scope: {provider_id}")
        try:
            yield provider_id
        finally:
            self._override.reset(token)
            logger.debug(f"Left provider scope: {provider_id}")

    def with_provider(self, provider_id: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Run ``fn`` with the active provider overridden to ``provider_id``.

        Coroutine functions, and callables returning an awaitable, get back a
        coroutine that holds the override for the whole awaited extent:

            await ctx.with_provider("supabase", submit_login)

        Returns:
            Whatever ``fn`` returns (or a coroutine resolving to it)
        """
        if inspect.iscoroutinefunction(fn):
            return self._run_async(provider_id, functools.partial(fn, *args, **kwargs))

        with self.provider_scope(provider_id):
            result = fn(*args, **kwargs)

        if inspect.isawaitable(result):
            return self._await_in_scope(provider_id, result)
        return result

    async def _run_async(self, provider_id: str, call: Callable[[], Any]) -> Any:
        with self.provider_scope(provider_id):
            return await call()

    async def _await_in_scope(self, provider_id: str, awaitable: Any) -> Any:
        with self.provider_scope(provider_id):
            return await awaitable
