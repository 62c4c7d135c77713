"""
Git client infrastructure for commitbump.

Provides a clean, read-only abstraction over git command execution.
All repository access goes through this client, making it:
- Easy to replace with an in-memory reader for testing
- Consistent in error handling
- Isolated from business logic
"""

import shlex
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, runtime_checkable
import logging

from ..domain.git import GitCommit, GitTag
from ..exit_codes import RepositoryError

logger = logging.getLogger(__name__)

# Field and record separators for git --format output
FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
COMMIT_FORMAT = "%H%x1f%cI%x1f%B%x1e"


@runtime_checkable
class RepositoryReader(Protocol):
    """
    Read-only view of a repository used by the analysis services.

    Implementations must not modify the repository.
    """

    def tags(self, path: str) -> List[GitTag]:
        """All tags with the object id they point at."""
        ...

    def lookup_commit(self, path: str, target: str) -> Optional[GitCommit]:
        """Peel a target (commit or annotated tag) to a commit, or None."""
        ...

    def walk(self, path: str) -> List[GitCommit]:
        """Commits reachable from HEAD, children before parents, newest first."""
        ...


def _parse_timestamp(value: str) -> datetime:
    """Parse git's strict ISO 8601 date (``%cI``)."""
    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    date = datetime.fromisoformat(value)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date


def _parse_commit_record(record: str) -> Optional[GitCommit]:
    """Parse one ``COMMIT_FORMAT`` record."""
    record = record.lstrip('\n')
    if not record:
        return None
    parts = record.split(FIELD_SEP, 2)
    if len(parts) < 3:
        logger.debug(f"Skipping unparseable commit record: {record[:40]!r}")
        return None
    commit_hash, date_str, message = parts
    return GitCommit(
        id=commit_hash.strip(),
        message=message.rstrip('\n'),
        committed_at=_parse_timestamp(date_str),
    )


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        for tag in client.tags("/path/to/repo"):
            commit = client.lookup_commit("/path/to/repo", tag.target)
            if commit:
                print(tag.name, commit.committed_at)
    """

    def __init__(self, timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def _run(
        self,
        cmd: str,
        cwd: str,
        check: bool = False,
        raise_io_errors: bool = False
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            cmd: Command to run
            cwd: Working directory
            check: Raise RepositoryError instead of returning a failure code
            raise_io_errors: Raise RepositoryError on timeouts and OS errors
                but still return non-zero exit codes

        Returns:
            Tuple of (stdout, returncode)
        """
        try:
            result = subprocess.run(
                cmd,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Git command timed out: {cmd}")
            if check or raise_io_errors:
                raise RepositoryError(f"Git command timed out after {self.timeout}s: {cmd}", path=cwd) from e
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {cmd} - {e}")
            if check or raise_io_errors:
                raise RepositoryError(f"Cannot run git in {cwd}: {e}", path=cwd) from e
            return None, -1

        if check and result.returncode != 0:
            stderr = (result.stderr or '').strip()
            raise RepositoryError(f"Git command failed: {cmd}: {stderr}", path=cwd)

        # Trailing newlines only; COMMIT_FORMAT separators must survive
        output = result.stdout
        return output.rstrip('\n') if output else None, result.returncode

    def is_git_repo(self, path: str) -> bool:
        """Check if path is inside a git working tree."""
        if not Path(path).is_dir():
            return False
        output, code = self._run("git rev-parse --is-inside-work-tree", cwd=path)
        return code == 0 and output == "true"

    def ensure_repo(self, path: str) -> None:
        """
        Raise RepositoryError unless path is a git repository.
        """
        if not self.is_git_repo(path):
            raise RepositoryError(f"Not a git repository: {path}", path=path)

    def has_head(self, path: str) -> bool:
        """Check whether HEAD points at a commit (false for empty repos)."""
        _, code = self._run("git rev-parse --verify -q HEAD", cwd=path)
        return code == 0

    def tags(self, path: str) -> List[GitTag]:
        """
        List git tags.

        Args:
            path: Path to git repository

        Returns:
            List of GitTag objects sorted by name. Targets are the raw ref
            values; annotated tags still need peeling via lookup_commit().
        """
        cmd = "git for-each-ref --sort=refname --format='%(refname)%09%(objectname)' refs/tags"
        output, _ = self._run(cmd, cwd=path, check=True)
        if not output:
            return []

        tags = []
        for line in output.split('\n'):
            if '\t' not in line:
                continue
            refname, target = line.split('\t', 1)
            name = refname[len('refs/tags/'):] if refname.startswith('refs/tags/') else refname
            tags.append(GitTag(name=name, target=target.strip()))
        return tags

    def lookup_commit(self, path: str, target: str) -> Optional[GitCommit]:
        """
        Resolve an object id to the commit it (eventually) points at.

        Args:
            path: Path to git repository
            target: Commit id or annotated tag id

        Returns:
            GitCommit, or None if target does not lead to a commit

        Raises:
            RepositoryError: git timed out or could not be started
        """
        ref = shlex.quote(f"{target}^{{commit}}")
        cmd = f"git log -1 --format='{COMMIT_FORMAT}' {ref} --"
        output, code = self._run(cmd, cwd=path, raise_io_errors=True)
        if code != 0 or not output:
            logger.debug(f"Could not resolve {target} to a commit in {path}")
            return None
        return _parse_commit_record(output.split(RECORD_SEP, 1)[0])

    def walk(self, path: str) -> List[GitCommit]:
        """
        List commits reachable from HEAD.

        No parent is listed before all of its children; otherwise commits
        are in committer-time order, newest first.

        Args:
            path: Path to git repository

        Returns:
            List of GitCommit objects, HEAD first
        """
        if not self.has_head(path):
            logger.debug(f"{path} has no commits yet")
            return []

        cmd = f"git log --date-order --format='{COMMIT_FORMAT}' HEAD --"
        output, _ = self._run(cmd, cwd=path, check=True)
        if not output:
            return []

        commits = []
        for record in output.split(RECORD_SEP):
            commit = _parse_commit_record(record)
            if commit is not None:
                commits.append(commit)
        return commits
