"""Capability registry + profile resolver (public API).

Import from here::

    from envprofiles.registry import CapabilityRegistry, ProfileResolver

Implementation lives in :mod:`envprofiles.registry.registry` and
:mod:`envprofiles.registry.resolver`.
"""

from .records import ImplementationRecord
from .registry import CapabilityRegistry, DuplicateTag, ProfileError, RegistryFrozen
from .resolver import (
    AmbiguousProfile,
    NoMatchingProfile,
    ProfileResolver,
    normalize_profiles,
    resolve,
)

__all__ = [
    "AmbiguousProfile",
    "CapabilityRegistry",
    "DuplicateTag",
    "ImplementationRecord",
    "NoMatchingProfile",
    "ProfileError",
    "ProfileResolver",
    "RegistryFrozen",
    "normalize_profiles",
    "resolve",
]
