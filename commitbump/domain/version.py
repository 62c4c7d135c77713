"""
Version domain object for commitbump.

Versions are plain ``MAJOR.MINOR.PATCH`` triples. Prerelease and build
suffixes are not supported; a tag carrying one is rejected as malformed.

Note: bumping a component leaves the other components untouched, so a
MAJOR bump of 1.2.3 gives 2.2.3, not 2.0.0. This differs from the usual
semantic versioning convention and is kept on purpose so that computed
versions stay stable for existing histories.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional

from ..exit_codes import MalformedVersionError
from .release import ReleaseType
from .tag_format import TagFormat

BOOTSTRAP_VERSION = "1.0.0"

_COMPONENT_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Version:
    """An immutable ``(major, minor, patch)`` triple."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str, tag_name: Optional[str] = None) -> 'Version':
        """
        Parse ``MAJOR.MINOR.PATCH``.

        Args:
            text: Version text, e.g. "1.2.3"
            tag_name: Tag the text came from, for error messages

        Raises:
            MalformedVersionError: Unless there are exactly three
                dot-separated non-negative integers
        """
        parts = text.split('.')
        if len(parts) != 3 or not all(_COMPONENT_RE.fullmatch(p) for p in parts):
            raise MalformedVersionError(text, tag_name)
        major, minor, patch = (int(p) for p in parts)
        return cls(major=major, minor=minor, patch=patch)

    def bump(self, release_type: ReleaseType) -> 'Version':
        """Increment only the component named by the release type."""
        if release_type == ReleaseType.MAJOR:
            return replace(self, major=self.major + 1)
        if release_type == ReleaseType.MINOR:
            return replace(self, minor=self.minor + 1)
        if release_type == ReleaseType.PATCH:
            return replace(self, patch=self.patch + 1)
        return self

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def next_version(
    last_tag_name: Optional[str],
    release_type: ReleaseType,
    tag_format: str
) -> str:
    """
    Compute the next version string.

    Args:
        last_tag_name: Name of the last release tag, or None if there is none
        release_type: Aggregated release decision
        tag_format: Tag format containing ``{version}``

    Returns:
        BOOTSTRAP_VERSION when there is no previous release, otherwise the
        last release's version bumped by release_type
    """
    if last_tag_name is None:
        return BOOTSTRAP_VERSION

    fmt = TagFormat.parse(tag_format)
    current = Version.parse(fmt.extract_version(last_tag_name), tag_name=last_tag_name)
    return str(current.bump(release_type))
