from __future__ import annotations

"""Typed record helpers used by the registry.

An :class:`ImplementationRecord` pairs a profile tag with the object that
implements the capability for that profile. Records are frozen once built.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ImplementationRecord:
    tag: str              # profile label, e.g. 'dev','qa','prod'
    implementation: Any   # concrete realization of the capability

    @property
    def kind(self) -> str:
        """Class name of the implementation (handy in logs and error text)."""
        return type(self.implementation).__name__
