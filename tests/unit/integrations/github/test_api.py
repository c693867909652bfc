import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import jwt
import pytest

from label_owners.core.config import config
from label_owners.core.errors import GitHubApiError, GitHubAuthError
from label_owners.integrations.github.api import GitHubClient
from label_owners.integrations.github.models import FileFetchStatus


@pytest.fixture
def mock_aiohttp_session():
    with patch("aiohttp.ClientSession") as mock_session_cls:
        mock_session = AsyncMock()
        mock_session_cls.return_value = mock_session

        # Request methods return the response context manager directly
        mock_session.get = MagicMock()
        mock_session.post = MagicMock()

        def create_mock_response(status, json_data=None, text_data=None):
            mock_response = AsyncMock()
            mock_response.status = status

            async def mock_json():
                return json_data

            mock_response.json = mock_json

            async def mock_text():
                return text_data if text_data is not None else ""

            mock_response.text = mock_text

            mock_response.__aenter__.return_value = mock_response
            mock_response.__aexit__.return_value = None

            return mock_response

        mock_session.create_mock_response = create_mock_response

        yield mock_session


@pytest.fixture
def github_client(mock_aiohttp_session, monkeypatch):
    monkeypatch.setattr(config.github, "token", "")
    with patch("label_owners.integrations.github.api.GitHubClient._generate_jwt", return_value="mock_jwt_token"):
        client = GitHubClient()
        client._private_key = "mock_key"
        client._app_id = "12345"
        client._session = mock_aiohttp_session
        yield client


def _encoded(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


@pytest.mark.asyncio
async def test_get_installation_access_token_success(github_client, mock_aiohttp_session):
    mock_aiohttp_session.post.return_value = mock_aiohttp_session.create_mock_response(
        201, json_data={"token": "access_token"}
    )

    token = await github_client.get_installation_access_token(42)

    assert token == "access_token"
    assert github_client._token_cache[42] == "access_token"


@pytest.mark.asyncio
async def test_get_installation_access_token_cached(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "cached_token"

    token = await github_client.get_installation_access_token(42)

    assert token == "cached_token"
    mock_aiohttp_session.post.assert_not_called()


@pytest.mark.asyncio
async def test_get_installation_access_token_failure(github_client, mock_aiohttp_session):
    mock_aiohttp_session.post.return_value = mock_aiohttp_session.create_mock_response(403, text_data="Forbidden")

    assert await github_client.get_installation_access_token(42) is None


@pytest.mark.asyncio
async def test_get_installation_access_token_without_app_credentials(github_client, mock_aiohttp_session):
    github_client._private_key = ""

    assert await github_client.get_installation_access_token(42) is None
    mock_aiohttp_session.post.assert_not_called()


@pytest.mark.asyncio
async def test_get_file_contents_found(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.return_value = mock_aiohttp_session.create_mock_response(
        200, json_data={"type": "file", "encoding": "base64", "content": _encoded("src/* @dev1\n")}
    )

    result = await github_client.get_file_contents("octo/repo", ".github/CODEOWNERS", 42)

    assert result.status is FileFetchStatus.FOUND
    assert result.content == "src/* @dev1\n"
    assert result.path == ".github/CODEOWNERS"
    url = mock_aiohttp_session.get.call_args[0][0]
    assert url == "https://api.github.com/repos/octo/repo/contents/.github/CODEOWNERS"
    headers = mock_aiohttp_session.get.call_args[1]["headers"]
    assert headers["Authorization"] == "Bearer access_token"


@pytest.mark.asyncio
async def test_get_file_contents_not_found(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.return_value = mock_aiohttp_session.create_mock_response(404, text_data="Not Found")

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.NOT_FOUND
    assert result.content is None


@pytest.mark.asyncio
async def test_get_file_contents_server_error(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.return_value = mock_aiohttp_session.create_mock_response(500, text_data="boom")

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR
    assert result.error == "HTTP 500: boom"


@pytest.mark.asyncio
async def test_get_file_contents_network_error(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.side_effect = aiohttp.ClientConnectionError("connection reset")

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR
    assert "connection reset" in result.error


@pytest.mark.asyncio
async def test_get_file_contents_timeout(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.side_effect = asyncio.TimeoutError()

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR
    assert result.error == "TimeoutError"


@pytest.mark.asyncio
async def test_get_file_contents_jwt_failure(github_client, mock_aiohttp_session):
    with patch.object(github_client, "_generate_jwt", side_effect=jwt.InvalidKeyError("bad key")):
        result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR
    assert "bad key" in result.error
    mock_aiohttp_session.get.assert_not_called()


@pytest.mark.asyncio
async def test_get_file_contents_directory_payload(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.get.return_value = mock_aiohttp_session.create_mock_response(200, json_data=[{"name": "a"}])

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", 42)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR


@pytest.mark.asyncio
async def test_get_file_contents_without_credentials(github_client, mock_aiohttp_session):
    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", None)

    assert result.status is FileFetchStatus.TRANSPORT_ERROR
    mock_aiohttp_session.get.assert_not_called()


@pytest.mark.asyncio
async def test_static_token_used_without_installation(github_client, mock_aiohttp_session, monkeypatch):
    monkeypatch.setattr(config.github, "token", "static_token")
    mock_aiohttp_session.get.return_value = mock_aiohttp_session.create_mock_response(
        200, json_data={"content": _encoded("docs/* @alice")}
    )

    result = await github_client.get_file_contents("octo/repo", "CODEOWNERS", None)

    assert result.found
    headers = mock_aiohttp_session.get.call_args[1]["headers"]
    assert headers["Authorization"] == "Bearer static_token"


@pytest.mark.asyncio
async def test_add_assignees_success(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.post.return_value = mock_aiohttp_session.create_mock_response(
        201, json_data={"number": 3, "assignees": [{"login": "dev2"}]}
    )

    result = await github_client.add_assignees("octo/repo", 3, ["dev2"], 42)

    assert result["number"] == 3
    args, kwargs = mock_aiohttp_session.post.call_args
    assert args[0] == "https://api.github.com/repos/octo/repo/issues/3/assignees"
    assert kwargs["json"] == {"assignees": ["dev2"]}


@pytest.mark.asyncio
async def test_add_assignees_failure_raises(github_client, mock_aiohttp_session):
    github_client._token_cache[42] = "access_token"
    mock_aiohttp_session.post.return_value = mock_aiohttp_session.create_mock_response(422, text_data="Invalid")

    with pytest.raises(GitHubApiError) as exc_info:
        await github_client.add_assignees("octo/repo", 3, ["dev2"], 42)

    assert exc_info.value.status == 422


@pytest.mark.asyncio
async def test_add_assignees_without_credentials_raises(github_client):
    with pytest.raises(GitHubAuthError):
        await github_client.add_assignees("octo/repo", 3, ["dev2"], None)
