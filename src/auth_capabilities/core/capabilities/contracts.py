"""Capability contract set.

Defines the closed catalogue of capability keys and the shape every
implementation of a key must satisfy. Contracts are owned by the contract set,
not by any provider; providers only bind implementations to keys.

Every catalogue contract is a zero-argument factory ("composable" style): the
consumer calls it and gets back an object exposing the contract's attributes,
for example the login contract produces a form, a loading flag, an ``invoke``
coroutine and error-state accessors.
"""

import inspect
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import ContractViolationError, InvalidImplementationError, UnknownCapabilityError

logger = logging.getLogger(__name__)


class CapabilityKey(str, Enum):
    """Known capability keys, namespaced ``category:operation``."""

    IDENTITY_PASSWORD_LOGIN = "identityPassword:login"
    IDENTITY_PASSWORD_REGISTER = "identityPassword:register"
    IDENTITY_PASSWORD_REAUTHENTICATE = "identityPassword:reauthenticate"
    IDENTITY_PASSWORD_CHANGE_PASSWORD = "identityPassword:changePassword"
    IDENTITY_PASSWORD_FORGOT_PASSWORD = "identityPassword:forgotPassword"
    IDENTITY_PASSWORD_RESET_PASSWORD = "identityPassword:resetPassword"
    OAUTH_LOGIN = "oauth:login"
    SESSION_LOGOUT = "session:logout"
    SESSION_CURRENT_USER = "session:currentUser"
    ERROR_HANDLER = "errorHandler"

    def __str__(self) -> str:
        return self.value


KeyLike = Union[CapabilityKey, str]


def normalize_key(key: KeyLike) -> str:
    """Return the plain string form of a capability key.

    Registry maps and log messages always carry plain ``str`` keys, whether
    callers pass an enum member or its value.
    """
    if isinstance(key, CapabilityKey):
        return key.value
    return str(key)


class Contract(BaseModel):
    """Input/output shape of a single capability.

    Attributes:
        key: Capability key this contract describes
        description: Human readable summary
        parameters: Positional parameters the implementation must accept
        result_attributes: Attributes the produced object must expose
        optional: Providers may legitimately leave this capability unbound
    """

    model_config = ConfigDict(frozen=True)

    key: str
    description: str = ""
    parameters: tuple[str, ...] = ()
    result_attributes: tuple[str, ...] = ()
    optional: bool = False

    @property
    def category(self) -> Optional[str]:
        """Namespace part of the key, or None for unnamespaced keys."""
        if ":" not in self.key:
            return None
        return self.key.split(":", 1)[0]


_FORM_RESULT = ("form", "loading", "invoke", "validation_errors", "request_error")


class ContractSet:
    """Closed catalogue of contracts keyed by capability key."""

    def __init__(self, contracts: Iterable[Contract]):
        self._contracts: dict[str, Contract] = {}
        for contract in contracts:
            if contract.key in self._contracts:
                raise ValueError(f"Duplicate contract for capability key: {contract.key}")
            self._contracts[contract.key] = contract

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return normalize_key(key) in self._contracts

    def __iter__(self):
        return iter(self._contracts.values())

    def __len__(self) -> int:
        return len(self._contracts)

    def keys(self) -> list[str]:
        return list(self._contracts)

    def get(self, key: KeyLike) -> Optional[Contract]:
        return self._contracts.get(normalize_key(key))

    def require(self, key: KeyLike, provider_id: Optional[str] = None) -> Contract:
        """Return the contract for ``key`` or raise UnknownCapabilityError."""
        contract = self.get(key)
        if contract is None:
            raise UnknownCapabilityError(normalize_key(key), provider_id)
        return contract

    def is_optional(self, key: KeyLike) -> bool:
        contract = self.get(key)
        return contract is not None and contract.optional

    def validate_features(
        self, features: Mapping[str, Callable[..., Any]], provider_id: Optional[str] = None
    ) -> None:
        """Check a provider's feature map against the catalogue.

        Raises:
            UnknownCapabilityError: A key is not part of the catalogue
            InvalidImplementationError: An implementation is not callable or
                cannot be called with the contract's parameters
        """
        for key, implementation in features.items():
            contract = self.require(key, provider_id)
            self.validate_implementation(contract, implementation, provider_id)

    @staticmethod
    def validate_implementation(
        contract: Contract, implementation: Any, provider_id: Optional[str] = None
    ) -> None:
        if not callable(implementation):
            raise InvalidImplementationError(
                contract.key,
                f"expected a callable, got {type(implementation).__name__}",
                provider_id,
            )

        try:
            signature = inspect.signature(implementation)
        except (TypeError, ValueError):
            # Some builtins expose no signature; callability is all we can check
            logger.debug(f"No signature available for {contract.key} implementation")
            return

        try:
            signature.bind(*contract.parameters)
        except TypeError as e:
            expected = ", ".join(contract.parameters) or "no arguments"
            raise InvalidImplementationError(
                contract.key,
                f"signature {signature} does not accept ({expected}): {e}",
                provider_id,
            ) from e

    def verify_result(self, key: KeyLike, result: Any) -> Any:
        """Check that ``result`` exposes every attribute its contract names.

        Mapping results are checked by key, everything else by attribute.

        Returns:
            The result, unchanged

        Raises:
            ContractViolationError: One or more attributes are missing
        """
        contract = self.require(key)
        if isinstance(result, Mapping):
            missing = [name for name in contract.result_attributes if name not in result]
        else:
            missing = [name for name in contract.result_attributes if not hasattr(result, name)]
        if missing:
            raise ContractViolationError(contract.key, missing)
        return result


DEFAULT_CONTRACTS = ContractSet([
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_LOGIN.value,
        description="Log in with identity (email/username) and password",
        result_attributes=_FORM_RESULT,
    ),
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_REGISTER.value,
        description="Register a new account with identity and password",
        result_attributes=_FORM_RESULT,
    ),
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_REAUTHENTICATE.value,
        description="Confirm the current user's password before a sensitive action",
        result_attributes=_FORM_RESULT,
        optional=True,
    ),
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_CHANGE_PASSWORD.value,
        description="Change the current user's password",
        result_attributes=_FORM_RESULT,
        optional=True,
    ),
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_FORGOT_PASSWORD.value,
        description="Request a password reset message",
        result_attributes=_FORM_RESULT,
        optional=True,
    ),
    Contract(
        key=CapabilityKey.IDENTITY_PASSWORD_RESET_PASSWORD.value,
        description="Set a new password from a reset code",
        result_attributes=_FORM_RESULT,
        optional=True,
    ),
    Contract(
        key=CapabilityKey.OAUTH_LOGIN.value,
        description="Log in through an external OAuth identity provider",
        result_attributes=("loading", "invoke", "request_error"),
        optional=True,
    ),
    Contract(
        key=CapabilityKey.SESSION_LOGOUT.value,
        description="End the current session",
        result_attributes=("loading", "invoke", "request_error"),
    ),
    Contract(
        key=CapabilityKey.SESSION_CURRENT_USER.value,
        description="Expose the signed-in user, if any",
        result_attributes=("user", "loading"),
    ),
    Contract(
        key=CapabilityKey.ERROR_HANDLER.value,
        description="Translate backend errors into validation and request errors",
        result_attributes=("handle",),
    ),
])
