"""
Commit analysis service for commitbump.

Runs the full analysis for one repository:

    tag format -> last release tag -> commits since -> classify -> aggregate -> next version

The repository is only read. Reading can be moved onto a worker thread
with analyze_async(); classification starts once reading has finished.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

from ..config import load_config
from ..domain.classifier import ClassificationResult, CommitClassifier
from ..domain.git import GitCommit, ResolvedTag
from ..domain.release import ReleaseType, aggregate
from ..domain.tag_format import TagFormat
from ..domain.trace import TraceEvent, TraceSink, logging_sink
from ..domain.version import next_version
from ..infra.git_client import GitClient, RepositoryReader
from .history_service import commits_since
from .reference_service import find_last_tag

logger = logging.getLogger(__name__)

# Keys written into ReleaseContext.plugin_data
RELEASE_TYPE_KEY = "releaseType"
COMMITS_KEY = "commits"
NEXT_VERSION_KEY = "nextVersion"


@dataclass
class AnalysisResult:
    """Outcome of one analysis run."""
    release_type: ReleaseType
    commits: List[GitCommit]
    next_version: str
    last_tag: Optional[ResolvedTag] = None
    classifications: List[ClassificationResult] = field(default_factory=list)

    def to_plugin_data(self) -> Dict[str, Any]:
        """Values published to the surrounding release pipeline."""
        return {
            RELEASE_TYPE_KEY: self.release_type.label,
            COMMITS_KEY: self.commits,
            NEXT_VERSION_KEY: self.next_version,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        by_id = {c.commit_id: c for c in self.classifications}
        commits = []
        for commit in self.commits:
            item = commit.to_dict()
            classification = by_id.get(commit.id)
            if classification:
                item['release_type'] = classification.release_type.label
                item['rule'] = classification.rule
            commits.append(item)
        return {
            'release_type': self.release_type.label,
            'next_version': self.next_version,
            'last_tag': self.last_tag.to_dict() if self.last_tag else None,
            'commits': commits,
        }


@dataclass
class ReleaseContext:
    """
    Shared state of a release pipeline.

    Attributes:
        working_directory: Repository root
        tag_format: Tag format containing {version}
        plugin_data: Values shared between pipeline stages
    """
    working_directory: str
    tag_format: str = "v{version}"
    plugin_data: Dict[str, Any] = field(default_factory=dict)


class AnalysisService:
    """
    Service computing the next release from commit history.

    Example:
        service = AnalysisService()
        result = service.analyze("/path/to/repo", tag_format="v{version}")
        print(result.release_type, result.next_version)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        reader: Optional[RepositoryReader] = None,
        sink: Optional[TraceSink] = None
    ):
        """
        Initialize AnalysisService.

        Args:
            config: Configuration dict (loads default if None)
            reader: Repository reader (creates a GitClient if None)
            sink: Trace sink (logs events if None)
        """
        self.config = config if config is not None else load_config()
        git_config = self.config.get('git', {})
        self.reader = reader or GitClient(timeout=git_config.get('timeout_seconds', 30))
        self.sink = sink or logging_sink

    @property
    def release_config(self) -> Dict[str, Any]:
        return self.config.get('release', {})

    def _tag_format(self, tag_format: Optional[str]) -> TagFormat:
        if tag_format is None:
            tag_format = self.release_config.get('tag_format', 'v{version}')
        return TagFormat.parse(tag_format)

    def read_repository(
        self,
        working_directory: str,
        fmt: TagFormat
    ) -> Tuple[Optional[ResolvedTag], List[GitCommit]]:
        """
        Read the last release tag and the commits made since.

        Args:
            working_directory: Repository root
            fmt: Parsed tag format

        Returns:
            Tuple of (last tag or None, commits since it)
        """
        if isinstance(self.reader, GitClient):
            self.reader.ensure_repo(working_directory)

        last_tag = find_last_tag(
            self.reader.tags(working_directory),
            fmt.prefix,
            fmt.suffix,
            lambda target: self.reader.lookup_commit(working_directory, target),
            sink=self.sink,
        )
        if last_tag is not None:
            logger.info(f"Last tag is {last_tag.name} at {last_tag.commit.id}")

        commits = commits_since(self.reader.walk(working_directory), last_tag, sink=self.sink)
        return last_tag, commits

    def decide(
        self,
        fmt: TagFormat,
        last_tag: Optional[ResolvedTag],
        commits: List[GitCommit]
    ) -> AnalysisResult:
        """Classify commits and compute the next version."""
        classifier = CommitClassifier(
            patch_types=self.release_config.get('patch_types'),
            sink=self.sink,
        )
        logger.info(f"Found {len(commits)} commits since last tag")
        classifications = classifier.classify_all(commits)
        release_type = aggregate(c.release_type for c in classifications)
        self.sink(TraceEvent('release.decided', {'release_type': release_type.label}))
        logger.info(f"Final release type is: {release_type.label}")

        if last_tag is None:
            logger.info("No tags found matching the specified format")
        version = next_version(last_tag.name if last_tag else None, release_type, fmt.template)
        self.sink(TraceEvent('version.computed', {
            'last_tag': last_tag.name if last_tag else None,
            'next_version': version,
        }))
        logger.info(f"Next version is {version}")

        return AnalysisResult(
            release_type=release_type,
            commits=commits,
            next_version=version,
            last_tag=last_tag,
            classifications=classifications,
        )

    def analyze(self, working_directory: str, tag_format: Optional[str] = None) -> AnalysisResult:
        """
        Analyze a repository.

        Args:
            working_directory: Repository root
            tag_format: Tag format (defaults to release.tag_format from config)

        Returns:
            AnalysisResult

        Raises:
            InvalidFormatError: Tag format lacks {version}; raised before
                the repository is touched
            MalformedVersionError: The last tag's version cannot be parsed
            RepositoryError: The repository cannot be read
        """
        fmt = self._tag_format(tag_format)
        last_tag, commits = self.read_repository(working_directory, fmt)
        return self.decide(fmt, last_tag, commits)

    async def analyze_async(
        self,
        working_directory: str,
        tag_format: Optional[str] = None
    ) -> AnalysisResult:
        """Like analyze(), with repository reads on a worker thread."""
        fmt = self._tag_format(tag_format)
        last_tag, commits = await asyncio.to_thread(self.read_repository, working_directory, fmt)
        return self.decide(fmt, last_tag, commits)


def analyze_commits(
    context: ReleaseContext,
    service: Optional[AnalysisService] = None
) -> AnalysisResult:
    """
    Pipeline stage: analyze commits and publish the outcome into the context.

    Writes releaseType, commits and nextVersion into context.plugin_data,
    leaving any other keys in place.
    """
    logger.info("Beginning step 'AnalyzeCommits'...")
    service = service or AnalysisService()
    result = service.analyze(context.working_directory, context.tag_format)
    context.plugin_data.update(result.to_plugin_data())
    logger.info("Step 'AnalyzeCommits' completed successfully.")
    return result
