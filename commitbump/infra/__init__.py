"""
Infrastructure layer for commitbump.

Contains abstractions for external systems:
- GitClient: Read-only git command execution
- RepositoryReader: Protocol the services depend on

These provide clean interfaces that can be replaced for testing.
"""

from .git_client import GitClient, RepositoryReader

__all__ = [
    'GitClient',
    'RepositoryReader',
]
