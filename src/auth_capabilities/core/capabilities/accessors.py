"""Consumption surface.

Application code asks for a capability through a zero-argument accessor and
never learns which provider answered:

    login = use_login()
    await login.invoke()

Accessors resolve on every call, so a provider swapped in with
``with_provider`` or re-installed at runtime is picked up immediately.
"""

from typing import Any, Callable, ContextManager, Optional

from .contracts import CapabilityKey, KeyLike, normalize_key
from .factory import get_auth_capabilities


def accessor(key: KeyLike) -> Callable[..., Any]:
    """Build an accessor for ``key``.

    The accessor takes no positional arguments; ``provider`` selects a
    provider explicitly for that call, e.g. to show two login methods side
    by side.
    """
    capability_key = normalize_key(key)

    def use(*, provider: Optional[str] = None) -> Any:
        return get_auth_capabilities().use(capability_key, provider=provider)

    use.__name__ = f"use_{capability_key.replace(':', '_')}"
    use.__doc__ = f"Resolve and invoke the '{capability_key}' capability."
    return use


use_login = accessor(CapabilityKey.IDENTITY_PASSWORD_LOGIN)
use_register = accessor(CapabilityKey.IDENTITY_PASSWORD_REGISTER)
use_reauthenticate = accessor(CapabilityKey.IDENTITY_PASSWORD_REAUTHENTICATE)
use_change_password = accessor(CapabilityKey.IDENTITY_PASSWORD_CHANGE_PASSWORD)
use_forgot_password = accessor(CapabilityKey.IDENTITY_PASSWORD_FORGOT_PASSWORD)
use_reset_password = accessor(CapabilityKey.IDENTITY_PASSWORD_RESET_PASSWORD)
use_oauth_login = accessor(CapabilityKey.OAUTH_LOGIN)
use_logout = accessor(CapabilityKey.SESSION_LOGOUT)
use_current_user = accessor(CapabilityKey.SESSION_CURRENT_USER)
use_error_handler = accessor(CapabilityKey.ERROR_HANDLER)


def resolve(key: KeyLike, provider_id: Optional[str] = None) -> Callable[..., Any]:
    """Resolve ``key`` through the process-wide instance."""
    return get_auth_capabilities().resolve(key, provider_id)


def supports(key: KeyLike, provider_id: Optional[str] = None) -> bool:
    return get_auth_capabilities().supports(key, provider_id)


def with_provider(provider_id: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
    """Run ``fn`` against ``provider_id`` instead of the active provider."""
    return get_auth_capabilities().with_provider(provider_id, fn, *args, **kwargs)


def provider_scope(provider_id: str) -> ContextManager[str]:
    return get_auth_capabilities().provider_scope(provider_id)


def current_provider() -> str:
    return get_auth_capabilities().current()
