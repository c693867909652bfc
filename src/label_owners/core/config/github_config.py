"""
GitHub configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """GitHub configuration."""

    app_id: str
    private_key: str
    token: str = ""
    api_base_url: str = "https://api.github.com"
