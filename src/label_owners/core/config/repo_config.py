"""
Repository configuration.
"""

from dataclasses import dataclass


@dataclass
class RepoConfig:
    """Location of the label configuration inside a repository."""

    base_path: str = ".github"
    label_paths_file: str = "label-paths.yml"

    @property
    def label_paths_path(self) -> str:
        return f"{self.base_path}/{self.label_paths_file}"
