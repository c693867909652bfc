"""
Core error classes for the label code owners service.
"""


class GitHubApiError(Exception):
    """Raised when a GitHub API call whose failure must surface does not succeed."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"GitHub API error {status}: {message}")


class GitHubAuthError(Exception):
    """Raised when no credentials can be produced for a GitHub request."""

    pass


class RepositoryConfigError(Exception):
    """Raised when the repository's label configuration cannot be loaded."""

    pass
