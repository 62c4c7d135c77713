"""
commitbump - Next semantic version from conventional commit history.

commitbump looks at the commits made since the last release tag,
classifies each one by its conventional commit type and works out the
next version number.

Quick Start:
    import commitbump

    result = commitbump.AnalysisService().analyze(".", tag_format="v{version}")
    print(result.release_type, result.next_version)

    # As a stage in a release pipeline
    context = commitbump.ReleaseContext(working_directory=".", tag_format="v{version}")
    commitbump.analyze_commits(context)
    print(context.plugin_data["nextVersion"])

Classification rules (first match wins):
    feat:                                -> Minor
    fix: / perf: / refactor: / revert:   -> Patch
    BREAKING CHANGE, or <type>!:         -> Major
    anything else                        -> None

Without a matching tag the next version is always 1.0.0.
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    TagFormat,
    ReleaseType,
    Version,
    GitTag,
    GitCommit,
    ResolvedTag,
    TraceEvent,
    CommitClassifier,
    classify,
    aggregate,
    next_version,
)

# Services
from .services import (
    AnalysisService,
    AnalysisResult,
    ReleaseContext,
    analyze_commits,
    find_last_tag,
    commits_since,
)

# Errors
from .exit_codes import (
    CommandError,
    ConfigError,
    InvalidFormatError,
    DataError,
    MalformedVersionError,
    RepositoryError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "TagFormat",
    "ReleaseType",
    "Version",
    "GitTag",
    "GitCommit",
    "ResolvedTag",
    "TraceEvent",
    "CommitClassifier",
    "classify",
    "aggregate",
    "next_version",
    # Services
    "AnalysisService",
    "AnalysisResult",
    "ReleaseContext",
    "analyze_commits",
    "find_last_tag",
    "commits_since",
    # Errors
    "CommandError",
    "ConfigError",
    "InvalidFormatError",
    "DataError",
    "MalformedVersionError",
    "RepositoryError",
    # Configuration
    "load_config",
    "save_config",
]
