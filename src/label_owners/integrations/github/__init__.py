"""
GitHub API adapter.

This package provides integrations for GitHub API interactions.
"""

from label_owners.integrations.github.api import GitHubClient, github_client
from label_owners.integrations.github.models import FileFetchResult, FileFetchStatus

__all__ = [
    "FileFetchResult",
    "FileFetchStatus",
    "GitHubClient",
    "github_client",
]
