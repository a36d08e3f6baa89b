"""Provider descriptor.

A provider is a named backend integration (firebase, supabase, ...) that binds
implementations to some subset of the capability keys.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Optional

from .contracts import KeyLike, normalize_key


@dataclass(frozen=True)
class ProviderDescriptor:
    """Immutable bundle of a provider's capability bindings.

    Attributes:
        id: Unique provider identifier
        features: Mapping of capability key to implementation
        init_data: Provider-specific initialization data (e.g. credentials)
    """
    id: str
    features: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    init_data: Optional[Any] = None

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Provider id must be a non-empty string")
        # Copy into a read-only view so later changes to the caller's dict
        # cannot leak into an installed descriptor
        frozen = MappingProxyType(
            {normalize_key(key): impl for key, impl in dict(self.features).items()}
        )
        object.__setattr__(self, "features", frozen)

    def supports(self, key: KeyLike) -> bool:
        return normalize_key(key) in self.features

    def capability_keys(self) -> list[str]:
        return sorted(self.features)
