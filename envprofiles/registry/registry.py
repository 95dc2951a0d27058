from __future__ import annotations

"""Capability registry.

Holds the (tag, implementation) pairs known at process start. The registry is
append-only: records are added during a startup routine, then :meth:`freeze`
closes registration. After that it is read-only and may be shared across
threads without locking.

Usage (quick):
    from envprofiles.registry import CapabilityRegistry

    reg = CapabilityRegistry("datasource")
    reg.register("dev", DevDataSource())
    reg.register("prod", ProdDataSource())
    reg.freeze()
"""

import logging
from typing import Any, Iterator, List, Tuple

from .records import ImplementationRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class ProfileError(RuntimeError):
    """Base class for fatal profile registration / resolution problems."""


class DuplicateTag(ProfileError):
    """Raised when a tag is registered twice in the same registry."""

    def __init__(self, tag: str, registry_name: str = "capability") -> None:
        self.tag = tag
        self.registry_name = registry_name
        super().__init__(f"Profile tag {tag!r} is already registered in the {registry_name} registry")


class RegistryFrozen(ProfileError):
    """Raised when registering into a registry after :meth:`freeze`."""

    def __init__(self, tag: str, registry_name: str = "capability") -> None:
        self.tag = tag
        self.registry_name = registry_name
        super().__init__(
            f"Cannot register {tag!r}: the {registry_name} registry is frozen"
        )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class CapabilityRegistry:
    """
    Append-only store of :class:`ImplementationRecord` objects.

    Parameters
    ----------
    name:
        Capability name, used only in log lines and error messages.

    Notes
    -----
    * Tags are unique per registry; a repeated tag raises :class:`DuplicateTag`.
    * There is no removal operation.
    * Iterating the registry yields records in registration order.
    """

    def __init__(self, name: str = "capability") -> None:
        self.name = name
        self._records: List[ImplementationRecord] = []
        self._frozen = False

    def register(self, tag: str, implementation: Any) -> ImplementationRecord:
        """Add a record for ``tag`` and return it."""
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError(f"Profile tag must be a non-empty string, got {tag!r}")
        tag = tag.strip()
        if self._frozen:
            raise RegistryFrozen(tag, self.name)
        if any(rec.tag == tag for rec in self._records):
            raise DuplicateTag(tag, self.name)

        record = ImplementationRecord(tag=tag, implementation=implementation)
        self._records.append(record)
        logger.debug("Registered %s for profile %r in %s registry", record.kind, tag, self.name)
        return record

    def freeze(self) -> "CapabilityRegistry":
        """Close registration. Returns ``self`` so startup code can chain it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def all(self) -> Tuple[ImplementationRecord, ...]:
        """Return every record, in registration order."""
        return tuple(self._records)

    def tags(self) -> List[str]:
        return sorted(rec.tag for rec in self._records)

    def __iter__(self) -> Iterator[ImplementationRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, tag: object) -> bool:
        return any(rec.tag == tag for rec in self._records)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"CapabilityRegistry({self.name!r}, tags={self.tags()}, {state})"
