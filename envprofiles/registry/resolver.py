from __future__ import annotations

"""Profile resolver.

Picks the single implementation whose tag is in the active profile set.
Resolution is a pure function of (records, active profiles): no ambient
process state is consulted, the caller passes the active set explicitly.

Zero matches and multiple matches are both fatal. Profiles stand for mutually
exclusive deployment environments, so there is no fallback and no priority
order between candidates.
"""

import logging
from typing import Any, FrozenSet, Iterable, List, Sequence, Tuple, Union

from .records import ImplementationRecord
from .registry import CapabilityRegistry, ProfileError

logger = logging.getLogger(__name__)

Records = Union[CapabilityRegistry, Iterable[ImplementationRecord]]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class NoMatchingProfile(ProfileError):
    """No registered implementation corresponds to the active profile set."""

    def __init__(self, requested: Iterable[str], known: Iterable[str], capability: str = "capability") -> None:
        self.requested = sorted(requested)
        self.known = sorted(known)
        self.capability = capability
        super().__init__(
            f"No {capability} implementation for active profiles {self.requested}; "
            f"known profile tags: {self.known}"
        )


class AmbiguousProfile(ProfileError):
    """More than one registered implementation matches the active profile set."""

    def __init__(self, conflicting: Iterable[str], requested: Iterable[str], capability: str = "capability") -> None:
        self.conflicting = sorted(conflicting)
        self.requested = sorted(requested)
        self.capability = capability
        super().__init__(
            f"Ambiguous {capability} implementation for active profiles {self.requested}: "
            f"tags {self.conflicting} all match"
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def normalize_profiles(active_profiles: Union[str, Iterable[str], None]) -> FrozenSet[str]:
    """
    Turn the caller's active profiles into a frozenset of labels.

    >>> sorted(normalize_profiles("dev"))
    ['dev']
    >>> sorted(normalize_profiles(["qa", " prod ", ""]))
    ['prod', 'qa']
    >>> normalize_profiles(None)
    frozenset()
    """
    if active_profiles is None:
        return frozenset()
    if isinstance(active_profiles, str):
        active_profiles = [active_profiles]
    return frozenset(p.strip() for p in active_profiles if p and p.strip())


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------
class ProfileResolver:
    """
    Resolve one implementation out of a registry (or any record iterable).

    The records are snapshotted at construction, so a resolver never observes
    later registrations.
    """

    def __init__(self, records: Records, capability: str | None = None) -> None:
        if capability is None:
            capability = records.name if isinstance(records, CapabilityRegistry) else "capability"
        self.capability = capability
        self._records: Tuple[ImplementationRecord, ...] = tuple(records)

    @property
    def known_tags(self) -> List[str]:
        return sorted({rec.tag for rec in self._records})

    def candidates(self, active_profiles: Union[str, Iterable[str], None]) -> List[ImplementationRecord]:
        """Return every record whose tag is active, in registration order."""
        active = normalize_profiles(active_profiles)
        return [rec for rec in self._records if rec.tag in active]

    def resolve(self, active_profiles: Union[str, Iterable[str], None]) -> Any:
        """Return the single implementation matching ``active_profiles``."""
        active = normalize_profiles(active_profiles)
        matches = self.candidates(active)

        if not matches:
            raise NoMatchingProfile(active, self.known_tags, self.capability)
        if len(matches) > 1:
            raise AmbiguousProfile([rec.tag for rec in matches], active, self.capability)

        (chosen,) = matches
        logger.info("Resolved %s for profile %r -> %s", self.capability, chosen.tag, chosen.kind)
        return chosen.implementation


def resolve(records: Records, active_profiles: Union[str, Sequence[str], Iterable[str], None]) -> Any:
    """Module-level shortcut for ``ProfileResolver(records).resolve(active_profiles)``."""
    return ProfileResolver(records).resolve(active_profiles)
