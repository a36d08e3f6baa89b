"""Auth Capabilities

Provider-neutral authentication capabilities: application code asks for
"log in with identity and password" and the active provider answers.
"""

from auth_capabilities.core.capabilities import *  # noqa: F401,F403
from auth_capabilities.core.capabilities import __all__ as _capabilities_all
from auth_capabilities.core.capabilities.accessors import (
    accessor,
    current_provider,
    provider_scope,
    resolve,
    supports,
    use_change_password,
    use_current_user,
    use_error_handler,
    use_forgot_password,
    use_login,
    use_logout,
    use_oauth_login,
    use_reauthenticate,
    use_register,
    use_reset_password,
    with_provider,
)

__version__ = "1.0.0"

__all__ = _capabilities_all + [
    "accessor",
    "current_provider",
    "provider_scope",
    "resolve",
    "supports",
    "use_change_password",
    "use_current_user",
    "use_error_handler",
    "use_forgot_password",
    "use_login",
    "use_logout",
    "use_oauth_login",
    "use_reauthenticate",
    "use_register",
    "use_reset_password",
    "with_provider",
]
