"""
Conventional commit classifier for commitbump.

Maps a commit message to a release type. Rules are tried in order and
the first match wins:

    1. "feat:" prefix                          -> MINOR
    2. "<patch type>:" prefix (fix, perf, ...) -> PATCH
    3. "BREAKING CHANGE" anywhere, or "<word>!:" prefix -> MAJOR
    4. anything else                           -> NONE

Rule order matters. A message such as "feat: x" with a "BREAKING CHANGE"
footer stops at rule 1 and is MINOR. "feat!: x" does not start with
"feat:" and therefore reaches rule 3 (MAJOR).
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from ..exit_codes import ConfigError
from .git import GitCommit
from .release import ReleaseType
from .trace import TraceEvent, TraceSink, null_sink

MINOR_TYPE = "feat"
DEFAULT_PATCH_TYPES: Tuple[str, ...] = ("fix", "perf", "refactor", "revert")
BREAKING_MARKER = "BREAKING CHANGE"
BREAKING_SHAPE_RE = re.compile(r"^(\w+)!:")

# Rule names reported in ClassificationResult.rule
RULE_MINOR_TYPE = "minor-type"
RULE_PATCH_TYPE = "patch-type"
RULE_BREAKING_MARKER = "breaking-marker"
RULE_BREAKING_SHAPE = "breaking-shape"
RULE_NONE = "none"


@dataclass(frozen=True)
class ClassificationResult:
    """Release type assigned to a single commit and the rule that decided it."""
    commit_id: str
    release_type: ReleaseType
    rule: str


def match_rule(
    message: str,
    patch_types: Sequence[str] = DEFAULT_PATCH_TYPES
) -> Tuple[ReleaseType, str]:
    """
    Find the first rule matching a message.

    Returns:
        Tuple of (release type, rule name)
    """
    if message.startswith(f"{MINOR_TYPE}:"):
        return ReleaseType.MINOR, RULE_MINOR_TYPE
    if any(message.startswith(f"{t}:") for t in patch_types):
        return ReleaseType.PATCH, RULE_PATCH_TYPE
    if BREAKING_MARKER in message:
        return ReleaseType.MAJOR, RULE_BREAKING_MARKER
    if BREAKING_SHAPE_RE.match(message):
        return ReleaseType.MAJOR, RULE_BREAKING_SHAPE
    return ReleaseType.NONE, RULE_NONE


def classify(message: str, patch_types: Sequence[str] = DEFAULT_PATCH_TYPES) -> ReleaseType:
    """Classify a commit message. Pure function of its arguments."""
    return match_rule(message, patch_types)[0]


def normalize_patch_types(patch_types: Optional[Sequence[str]]) -> Tuple[str, ...]:
    """
    Validate configured patch types.

    Returns:
        Tuple of type names (the defaults if patch_types is None)

    Raises:
        ConfigError: patch_types is not a list of strings
    """
    if patch_types is None:
        return DEFAULT_PATCH_TYPES
    if not isinstance(patch_types, (list, tuple)) or not all(isinstance(t, str) for t in patch_types):
        raise ConfigError(
            f"release.patch_types must be a list of commit types, got {patch_types!r}"
        )
    return tuple(patch_types)


class CommitClassifier:
    """
    Classifies commits and reports each decision to a trace sink.

    Example:
        classifier = CommitClassifier(patch_types=["fix", "perf"])
        result = classifier.classify_commit(commit)
        print(result.release_type, result.rule)
    """

    def __init__(
        self,
        patch_types: Optional[Sequence[str]] = None,
        sink: Optional[TraceSink] = None
    ):
        """
        Initialize CommitClassifier.

        Args:
            patch_types: Conventional commit types that trigger a PATCH
                (default: fix, perf, refactor, revert)
            sink: Trace sink (discards events if None)
        """
        self.patch_types = normalize_patch_types(patch_types)
        self.sink = sink or null_sink

    def classify(self, message: str) -> ReleaseType:
        return classify(message, self.patch_types)

    def classify_commit(self, commit: GitCommit) -> ClassificationResult:
        release_type, rule = match_rule(commit.message, self.patch_types)
        self.sink(TraceEvent('commit.classified', {
            'commit': commit.id,
            'subject': commit.subject,
            'rule': rule,
            'release_type': release_type.label,
        }))
        return ClassificationResult(commit_id=commit.id, release_type=release_type, rule=rule)

    def classify_all(self, commits: Iterable[GitCommit]) -> list:
        """Classify commits in order."""
        return [self.classify_commit(c) for c in commits]
