"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from label_owners.core.config.github_config import GitHubConfig
from label_owners.core.config.logging_config import LoggingConfig
from label_owners.core.config.repo_config import RepoConfig

# Load environment variables from a .env file
load_dotenv()


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.github = GitHubConfig(
            app_id=os.getenv("APP_ID_GITHUB", ""),
            private_key=os.getenv("PRIVATE_KEY_BASE64_GITHUB", ""),
            token=os.getenv("TOKEN_GITHUB", ""),
            api_base_url=os.getenv("API_BASE_URL_GITHUB", "https://api.github.com"),
        )

        self.repo_config = RepoConfig(
            base_path=os.getenv("REPO_CONFIG_BASE_PATH", ".github"),
            label_paths_file=os.getenv("REPO_CONFIG_LABEL_PATHS_FILE", "label-paths.yml"),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if not self.github.token:
            if not self.github.app_id:
                errors.append("APP_ID_GITHUB is required when TOKEN_GITHUB is not set")
            if not self.github.private_key:
                errors.append("PRIVATE_KEY_BASE64_GITHUB is required when TOKEN_GITHUB is not set")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()
