import base64
import binascii
import time
from typing import Any
from urllib.parse import quote

import aiohttp
import jwt
import structlog
from cachetools import TTLCache

from label_owners.core.config import config
from label_owners.core.errors import GitHubApiError, GitHubAuthError
from label_owners.integrations.github.models import FileFetchResult

logger = structlog.get_logger(__name__)


class GitHubClient:
    """
    A client for interacting with the GitHub REST API.

    This client handles the authentication flow for a GitHub App, including
    generating a JWT and exchanging it for an installation access token.
    Tokens are cached to avoid minting a new one for every request. When an
    event carries no installation, the static token from configuration is
    used instead.
    """

    def __init__(self):
        self._private_key = self._decode_private_key() if config.github.private_key else ""
        self._app_id = config.github.app_id
        self._session: aiohttp.ClientSession | None = None
        # Cache for installation tokens (TTL: 50 minutes, GitHub tokens expire in 60)
        self._token_cache: TTLCache = TTLCache(maxsize=100, ttl=50 * 60)

    async def _get_auth_headers(
        self,
        installation_id: int | None = None,
        accept: str = "application/vnd.github.v3+json",
    ) -> dict[str, str] | None:
        """Build auth headers from an installation token, falling back to the configured token."""
        token: str | None = None
        if installation_id is not None:
            token = await self.get_installation_access_token(installation_id)
        if not token:
            token = config.github.token or None
        if not token:
            return None
        return {"Authorization": f"Bearer {token}", "Accept": accept}

    async def get_installation_access_token(self, installation_id: int) -> str | None:
        """
        Gets an access token for a specific installation of the GitHub App.
        Caches the token to avoid regenerating it for every request.
        """
        if installation_id in self._token_cache:
            logger.debug("Using cached installation token", installation_id=installation_id)
            return self._token_cache[installation_id]

        if not self._private_key or not self._app_id:
            logger.warning("GitHub App credentials are not configured", installation_id=installation_id)
            return None

        jwt_token = self._generate_jwt()
        headers = {
            "Authorization": f"Bearer {jwt_token}",
            "Accept": "application/vnd.github.v3+json",
        }
        url = f"{config.github.api_base_url}/app/installations/{installation_id}/access_tokens"

        session = await self._get_session()
        async with session.post(url, headers=headers) as response:
            if response.status == 201:
                data = await response.json()
                token = data["token"]
                self._token_cache[installation_id] = token
                logger.info("Generated new installation token", installation_id=installation_id)
                return token
            else:
                error_text = await response.text()
                logger.error(
                    "Failed to get installation access token",
                    installation_id=installation_id,
                    status=response.status,
                    response_body=error_text,
                )
                return None

    async def get_file_contents(
        self, repo_full_name: str, file_path: str, installation_id: int | None = None
    ) -> FileFetchResult:
        """
        Fetches and decodes the content of a file from a repository.

        Never raises: a missing file is reported as NOT_FOUND, and any other
        failure (network, auth, unexpected payload) as TRANSPORT_ERROR.
        """
        url = f"{config.github.api_base_url}/repos/{repo_full_name}/contents/{quote(file_path)}"
        try:
            headers = await self._get_auth_headers(installation_id=installation_id)
            if not headers:
                return FileFetchResult.transport_error(file_path, "no GitHub credentials available")

            session = await self._get_session()
            async with session.get(url, headers=headers) as response:
                if response.status == 404:
                    logger.info("File not found", repo=repo_full_name, path=file_path)
                    return FileFetchResult.not_found(file_path)
                if response.status != 200:
                    error_text = await response.text()
                    logger.warning(
                        "Failed to get file content",
                        repo=repo_full_name,
                        path=file_path,
                        status=response.status,
                        response_body=error_text,
                    )
                    return FileFetchResult.transport_error(file_path, f"HTTP {response.status}: {error_text}")
                data = await response.json()
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.warning("Error fetching file", repo=repo_full_name, path=file_path, error=error)
            return FileFetchResult.transport_error(file_path, error)

        if not isinstance(data, dict) or "content" not in data:
            return FileFetchResult.transport_error(file_path, "response is not a file")

        try:
            content = base64.b64decode(data["content"]).decode("utf-8", errors="replace")
        except (binascii.Error, TypeError, ValueError) as e:
            return FileFetchResult.transport_error(file_path, f"invalid base64 content: {e}")

        logger.info("Fetched file", repo=repo_full_name, path=file_path)
        return FileFetchResult.hit(file_path, content)

    async def add_assignees(
        self, repo: str, issue_number: int, assignees: list[str], installation_id: int | None = None
    ) -> dict[str, Any]:
        """
        Add assignees to an issue.

        Raises:
            GitHubAuthError: If no credentials are available.
            GitHubApiError: If GitHub does not accept the request.
        """
        headers = await self._get_auth_headers(installation_id=installation_id)
        if not headers:
            raise GitHubAuthError(f"No GitHub credentials available to assign issue #{issue_number} in {repo}")

        url = f"{config.github.api_base_url}/repos/{repo}/issues/{issue_number}/assignees"
        data = {"assignees": assignees}

        session = await self._get_session()
        async with session.post(url, headers=headers, json=data) as response:
            if response.status == 201:
                result = await response.json()
                logger.info("Added assignees", repo=repo, issue=issue_number, assignees=assignees)
                return result
            error_text = await response.text()
            logger.error(
                "Failed to add assignees",
                repo=repo,
                issue=issue_number,
                status=response.status,
                response_body=error_text,
            )
            raise GitHubApiError(response.status, error_text)

    async def close(self):
        """Closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Initializes and returns the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    def _generate_jwt(self) -> str:
        """Generates a JSON Web Token (JWT) to authenticate as the GitHub App."""
        payload = {
            "iat": int(time.time()),
            "exp": int(time.time()) + (1 * 60),  # X * minutes expiration
            "iss": self._app_id,
        }
        return jwt.encode(payload, self._private_key, algorithm="RS256")

    @staticmethod
    def _decode_private_key() -> str:
        """
        Decodes the base64-encoded private key from the configuration.

        Returns:
            The decoded private key as a string.
        """
        try:
            decoded_key = base64.b64decode(config.github.private_key).decode("utf-8")
            return decoded_key
        except Exception as e:
            logger.error("Failed to decode private key", error=str(e))
            raise ValueError("Invalid private key format. Expected base64-encoded PEM key.") from e


# Global instance
github_client = GitHubClient()
