from label_owners.loaders.github_loader import GitHubLabelPathsLoader
from label_owners.loaders.interface import LabelPathsLoader

__all__ = [
    "GitHubLabelPathsLoader",
    "LabelPathsLoader",
]
