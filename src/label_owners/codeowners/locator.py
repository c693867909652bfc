"""
Discovery of a repository's CODEOWNERS file over the GitHub API.
"""

import logging

from label_owners.codeowners.parser import CodeOwnersParser, OwnershipEntry, owners_for_path
from label_owners.integrations.github import FileFetchResult, GitHubClient

logger = logging.getLogger(__name__)

# https://help.github.com/articles/about-code-owners/
CODEOWNERS_PATHS = (
    "CODEOWNERS",
    ".github/CODEOWNERS",
)


class CodeOwnersResolver:
    """
    Resolves the code owners of a path in a repository.

    Every call fetches and parses CODEOWNERS again; nothing is kept between
    events.
    """

    def __init__(self, client: GitHubClient):
        self.github_client = client

    async def fetch_codeowners(self, repo: str, installation_id: int | None) -> list[FileFetchResult]:
        """
        Try each candidate location in order, stopping at the first one with content.

        Returns:
            Every fetch attempted, the last one being the hit if any was found.
        """
        attempts: list[FileFetchResult] = []
        for path in CODEOWNERS_PATHS:
            result = await self.github_client.get_file_contents(repo, path, installation_id)
            attempts.append(result)
            if result.found and result.content:
                return attempts
            logger.debug(f"No CODEOWNERS at {repo}/{path}: {result.status.value} {result.error or ''}".rstrip())
        return attempts

    async def get_code_owners(self, repo: str, installation_id: int | None) -> list[OwnershipEntry]:
        """
        Parse the first CODEOWNERS file found in the repository.

        Returns:
            The ordered ownership table, empty when no candidate could be read.
        """
        attempts = await self.fetch_codeowners(repo, installation_id)
        hit = attempts[-1] if attempts else None
        if hit is None or not hit.found or not hit.content:
            logger.info(f"No CODEOWNERS file found in {repo}")
            return []

        parser = CodeOwnersParser(hit.content)
        logger.info(f"Parsed {len(parser)} CODEOWNERS entries from {repo}/{hit.path}")
        return parser.owners_map

    async def get_owners_by_path(self, repo: str, path: str, installation_id: int | None) -> list[str]:
        """
        Get the owners of the first CODEOWNERS pattern matching a path.

        Returns:
            Owner usernames/teams, empty if there is no CODEOWNERS or no match.
        """
        owners_map = await self.get_code_owners(repo, installation_id)
        return owners_for_path(owners_map, path)

