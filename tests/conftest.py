"""Shared fixtures: an in-memory repository reader and commit builders."""

from datetime import datetime, timedelta, timezone

import pytest

from commitbump.domain.git import GitCommit, GitTag

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_commit(commit_id, message, minutes=0):
    """Build a commit `minutes` after BASE_TIME."""
    return GitCommit(
        id=commit_id,
        message=message,
        committed_at=BASE_TIME + timedelta(minutes=minutes),
    )


class FakeRepository:
    """
    In-memory RepositoryReader.

    Args:
        commits: Commits in walk order (HEAD first)
        tags: GitTag objects
        annotated: Map of annotated tag object id -> commit id
    """

    def __init__(self, commits=(), tags=(), annotated=None):
        self.commits = list(commits)
        self._tags = list(tags)
        self.annotated = dict(annotated or {})
        self.calls = []

    def tags(self, path):
        self.calls.append(('tags', path))
        return list(self._tags)

    def lookup_commit(self, path, target):
        self.calls.append(('lookup_commit', target))
        target = self.annotated.get(target, target)
        for commit in self.commits:
            if commit.id == target:
                return commit
        return None

    def walk(self, path):
        self.calls.append(('walk', path))
        return list(self.commits)


@pytest.fixture
def commit():
    """Factory fixture: commit(id, message, minutes=0)."""
    return make_commit


@pytest.fixture
def fake_repo():
    """Factory fixture: fake_repo(commits, tags, annotated)."""
    return FakeRepository


@pytest.fixture
def tag():
    """Factory fixture: tag(name, target)."""
    return GitTag
