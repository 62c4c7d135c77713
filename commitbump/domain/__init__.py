"""
Domain layer for commitbump.

Contains pure domain objects with no I/O or side effects:
- TagFormat: Where a version is embedded in a tag name
- ReleaseType: Ordered bump severity (NONE < PATCH < MINOR < MAJOR)
- Version: MAJOR.MINOR.PATCH triple and next-version arithmetic
- CommitClassifier: Conventional commit message rules
- GitTag / GitCommit: Read-only repository snapshots
- TraceEvent: Structured record of a decision

These objects are immutable where possible and provide
serialization methods for JSON output.
"""

from .tag_format import TagFormat, VERSION_TOKEN, split, matches, extract_version
from .release import ReleaseType, aggregate, max_release_type
from .version import Version, BOOTSTRAP_VERSION, next_version
from .classifier import (
    CommitClassifier,
    ClassificationResult,
    DEFAULT_PATCH_TYPES,
    classify,
)
from .git import GitTag, GitCommit, ResolvedTag
from .trace import TraceEvent, TraceSink, logging_sink, null_sink, collecting_sink

__all__ = [
    'TagFormat',
    'VERSION_TOKEN',
    'split',
    'matches',
    'extract_version',
    'ReleaseType',
    'aggregate',
    'max_release_type',
    'Version',
    'BOOTSTRAP_VERSION',
    'next_version',
    'CommitClassifier',
    'ClassificationResult',
    'DEFAULT_PATCH_TYPES',
    'classify',
    'GitTag',
    'GitCommit',
    'ResolvedTag',
    'TraceEvent',
    'TraceSink',
    'logging_sink',
    'null_sink',
    'collecting_sink',
]
