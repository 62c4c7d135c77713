"""
Git object snapshots for commitbump.

These are read-only views of repository state taken for a single
analysis run. They are produced by the infrastructure layer and never
written back.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class GitTag:
    """
    A tag ref.

    Attributes:
        name: Short tag name (e.g. "v1.2.3")
        target: Object id the ref points at. For annotated tags this is
            the tag object, which still has to be peeled to a commit.
    """
    name: str
    target: str


@dataclass(frozen=True)
class GitCommit:
    """
    A commit.

    Attributes:
        id: Full commit hash
        message: Full commit message (subject and body)
        committed_at: Committer timestamp (timezone-aware)
    """
    id: str
    message: str
    committed_at: datetime

    @property
    def subject(self) -> str:
        """First line of the message."""
        return self.message.split('\n', 1)[0]

    @property
    def short_id(self) -> str:
        return self.id[:7]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'message': self.message,
            'committed_at': self.committed_at.isoformat(),
        }


@dataclass(frozen=True)
class ResolvedTag:
    """A tag together with the commit it points at."""
    tag: GitTag
    commit: GitCommit

    @property
    def name(self) -> str:
        return self.tag.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.tag.name,
            'target': self.tag.target,
            'commit': self.commit.id,
            'committed_at': self.commit.committed_at.isoformat(),
        }
