"""
History walker for commitbump.

Collects the commits made since the last release: everything reachable
from HEAD up to, but not including, the commit the release tag points
at. Without a release tag the whole history is returned.
"""

from typing import Iterable, List, Optional
import logging

from ..domain.git import GitCommit, ResolvedTag
from ..domain.trace import TraceEvent, TraceSink, null_sink

logger = logging.getLogger(__name__)


def commits_since(
    history: Iterable[GitCommit],
    boundary: Optional[ResolvedTag],
    sink: Optional[TraceSink] = None
) -> List[GitCommit]:
    """
    Take commits from history until the boundary commit.

    Args:
        history: Commits reachable from HEAD in walk order (HEAD first)
        boundary: Last release tag, or None to take everything
        sink: Trace sink

    Returns:
        Commits newer than the boundary, in walk order
    """
    sink = sink or null_sink
    boundary_id = boundary.commit.id if boundary is not None else None

    commits = []
    for commit in history:
        if boundary_id is not None and commit.id == boundary_id:
            break
        commits.append(commit)

    since = boundary.tag.name if boundary is not None else None
    logger.debug(f"Found {len(commits)} commits since {since or 'beginning of history'}")
    sink(TraceEvent('history.collected', {'since': since, 'count': len(commits)}))
    return commits
