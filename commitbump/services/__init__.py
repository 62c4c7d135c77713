"""
Service layer for commitbump.

Contains the logic that orchestrates domain objects and infrastructure:
- find_last_tag: Last release tag by commit time
- commits_since: Commits made after the last release
- AnalysisService: Full analysis of one repository
- analyze_commits: Pipeline stage publishing into a ReleaseContext

Services are the primary API for commands to use.
"""

from .reference_service import find_last_tag
from .history_service import commits_since
from .analysis_service import (
    AnalysisService,
    AnalysisResult,
    ReleaseContext,
    analyze_commits,
)

__all__ = [
    'find_last_tag',
    'commits_since',
    'AnalysisService',
    'AnalysisResult',
    'ReleaseContext',
    'analyze_commits',
]
