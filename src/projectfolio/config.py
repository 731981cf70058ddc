"""Configuration management for projectfolio projects."""

import os
from pathlib import Path
from typing import Optional, Dict, Any

import toml
from pydantic import BaseModel, Field, ConfigDict

from projectfolio.exceptions import MissingCredentialError


class FolioConfig(BaseModel):
    """Configuration stored in .folio/config.toml."""

    model_config = ConfigDict(extra="allow")  # Allow additional fields for extensibility

    owner: Optional[str] = Field(
        default=None,
        description="Login whose repositories are listed (authenticated user if unset)",
    )
    api_url: str = Field(
        default="https://api.github.com/graphql", description="GraphQL endpoint"
    )
    manifest_path: str = Field(
        default=".project-manifest.yml",
        description="Sidecar manifest path inside each repository",
    )
    local_dir: str = Field(default="data/manual", description="Local record directory")
    output_path: str = Field(
        default="public/data/projects.json", description="Artifact destination"
    )
    page_size: int = Field(default=100, ge=1, le=100, description="Records per page")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=3, ge=0, description="Retries for transient failures per request"
    )
    retry_backoff: float = Field(
        default=1.0, ge=0, description="Seconds to wait per retry attempt"
    )
    tag_namespace: str = Field(
        default="portfolio", description="Namespace of status/visibility/sentinel tags"
    )
    token_env: str = Field(
        default="GH_TOKEN", description="Environment variable holding the credential"
    )


class Config:
    """Manages projectfolio project configuration."""

    def __init__(self, project_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            project_dir: Path to project directory. If None, uses FOLIO_PROJECT_DIR env var or current directory.
        """
        if project_dir is None:
            env_dir = os.environ.get("FOLIO_PROJECT_DIR")
            if env_dir:
                project_dir = Path(env_dir)

        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config_dir = self.project_dir / ".folio"
        self.config_path = self.config_dir / "config.toml"
        self._config: Optional[FolioConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> FolioConfig:
        """Load configuration from disk, with environment variable overrides."""
        if not self.exists:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)

        self._config = FolioConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_owner := os.environ.get("FOLIO_OWNER"):
            data["owner"] = env_owner

        if env_output := os.environ.get("FOLIO_OUTPUT_PATH"):
            data["output_path"] = env_output

        if env_local := os.environ.get("FOLIO_LOCAL_DIR"):
            data["local_dir"] = env_local

    def save(self, config: Optional[FolioConfig] = None) -> None:
        """Save configuration to disk.

        Args:
            config: Configuration to save. If None, saves current config.
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        self.config_dir.mkdir(parents=True, exist_ok=True)

        # TOML has no null, so unset options are left out
        config_dict = self._config.model_dump(exclude_none=True)

        with open(self.config_path, "w") as f:
            toml.dump(config_dict, f)

    def init_project(self, owner: Optional[str] = None) -> FolioConfig:
        """Write a default configuration for a new project.

        Raises:
            FileExistsError: If the project is already initialized
        """
        if self.exists:
            raise FileExistsError(f"Project already initialized at {self.config_dir}")

        config = FolioConfig(owner=owner)
        self.save(config)
        return config

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the project directory."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.project_dir / candidate


def resolve_token(config: FolioConfig) -> str:
    """Read the remote host credential from the environment.

    Raises:
        MissingCredentialError: If the variable is unset or blank
    """
    token = os.environ.get(config.token_env, "").strip()
    if not token:
        raise MissingCredentialError(
            f"{config.token_env} environment variable is required"
        )
    return token
