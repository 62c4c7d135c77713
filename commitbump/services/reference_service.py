"""
Reference resolver for commitbump.

Finds the last release tag: the tag matching the configured format
whose commit has the latest committer timestamp. Tag names and tag
creation order are not used for ordering, since tags can be created
out of order relative to history.
"""

from typing import Callable, Iterable, Optional
import logging

from ..domain.git import GitCommit, GitTag, ResolvedTag
from ..domain.tag_format import matches
from ..domain.trace import TraceEvent, TraceSink, null_sink

logger = logging.getLogger(__name__)

CommitLookup = Callable[[str], Optional[GitCommit]]


def find_last_tag(
    tags: Iterable[GitTag],
    prefix: str,
    suffix: str,
    lookup_commit: CommitLookup,
    sink: Optional[TraceSink] = None
) -> Optional[ResolvedTag]:
    """
    Find the most recent tag matching prefix/suffix.

    Args:
        tags: All tags in the repository
        prefix: Literal tag prefix from the tag format
        suffix: Literal tag suffix from the tag format
        lookup_commit: Resolves a tag target to a commit, or None
        sink: Trace sink

    Returns:
        The winning tag with its commit, or None if no matching tag
        resolves to a commit. Equal timestamps go to the smallest name.
    """
    sink = sink or null_sink
    candidates = []

    for tag in tags:
        if not matches(tag.name, prefix, suffix):
            continue
        commit = lookup_commit(tag.target)
        if commit is None:
            logger.debug(f"Tag {tag.name} does not resolve to a commit; skipping")
            sink(TraceEvent('tag.unresolved', {'tag': tag.name, 'target': tag.target}))
            continue
        candidates.append(ResolvedTag(tag=tag, commit=commit))

    if not candidates:
        sink(TraceEvent('tag.none', {'prefix': prefix, 'suffix': suffix}))
        return None

    candidates.sort(key=lambda c: c.tag.name)
    last = max(candidates, key=lambda c: c.commit.committed_at)
    sink(TraceEvent('tag.selected', {
        'tag': last.tag.name,
        'commit': last.commit.id,
        'committed_at': last.commit.committed_at.isoformat(),
        'candidates': len(candidates),
    }))
    return last
