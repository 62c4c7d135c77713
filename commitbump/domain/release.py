"""
Release type domain object for commitbump.

Release types are totally ordered: NONE < PATCH < MINOR < MAJOR.
The ordering is what combines many commits into one release decision;
the numeric values carry no other meaning.
"""

from enum import IntEnum
from functools import reduce
from typing import Iterable


class ReleaseType(IntEnum):
    """Severity of the version bump implied by one or more commits."""
    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    @property
    def label(self) -> str:
        """Display name, e.g. ``"Patch"``."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> 'ReleaseType':
        """Parse a release type name, case-insensitively."""
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown release type: {label!r}") from None

    def __str__(self) -> str:
        return self.label


def max_release_type(a: ReleaseType, b: ReleaseType) -> ReleaseType:
    """Return the more severe of two release types."""
    return a if a >= b else b


def aggregate(release_types: Iterable[ReleaseType]) -> ReleaseType:
    """
    Reduce release types to a single decision.

    The result is the most severe input; an empty input yields NONE.
    """
    return reduce(max_release_type, release_types, ReleaseType.NONE)
