from abc import ABC, abstractmethod


class LabelPathsLoader(ABC):
    """
    Abstract interface for fetching a repository's label-to-path mapping.
    """

    @abstractmethod
    async def get_label_paths(self, repository: str, installation_id: int | None) -> dict[str, str]:
        """
        Fetch the label-to-path mapping for a repository.

        Args:
            repository: The repository in format "owner/repo"
            installation_id: The GitHub App installation ID for authentication

        Returns:
            Mapping of label name to a repository-relative path, empty if the
            repository has no configuration
        """
        pass
