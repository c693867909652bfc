"""
GitHub-based label configuration loader.

Reads the label-to-path mapping from a YAML file stored in the repository.
"""

from typing import Any

import structlog
import yaml

from label_owners.core.config import config
from label_owners.core.errors import RepositoryConfigError
from label_owners.integrations.github import FileFetchStatus, GitHubClient
from label_owners.loaders.interface import LabelPathsLoader

logger = structlog.get_logger(__name__)


class GitHubLabelPathsLoader(LabelPathsLoader):
    """
    Loads label paths from the repository's ``.github/label-paths.yml``.

    A missing file means an empty mapping. Any other failure to read or parse
    the file raises RepositoryConfigError.
    """

    def __init__(self, client: GitHubClient):
        self.github_client = client

    async def get_label_paths(self, repository: str, installation_id: int | None) -> dict[str, str]:
        config_path = config.repo_config.label_paths_path

        result = await self.github_client.get_file_contents(repository, config_path, installation_id)
        if result.status is FileFetchStatus.NOT_FOUND:
            logger.info("No label configuration", repo=repository, path=config_path)
            return {}
        if result.status is FileFetchStatus.TRANSPORT_ERROR:
            raise RepositoryConfigError(f"Could not fetch {config_path} from {repository}: {result.error}")

        try:
            data = yaml.safe_load(result.content or "")
        except yaml.YAMLError as e:
            raise RepositoryConfigError(f"Invalid YAML in {repository}/{config_path}: {e}") from e

        return self._parse_label_paths(data, f"{repository}/{config_path}")

    @staticmethod
    def _parse_label_paths(data: Any, source: str) -> dict[str, str]:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise RepositoryConfigError(f"{source} must be a mapping of label names to paths")

        label_paths: dict[str, str] = {}
        for label, path in data.items():
            if not isinstance(path, str):
                logger.warning("Ignoring non-string path for label", source=source, label=label)
                continue
            label_paths[str(label)] = path
        return label_paths
