"""Configuration handling for repo_inspector."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_inspector.errors import ConfigError, ErrorCode


class GitConfig(BaseModel):
    """Git-specific configuration."""

    executable: str = Field(
        default="git",
        description="Name or path of the git executable",
    )
    timeout: float = Field(
        default=10.0,
        description="Seconds before a git process is killed",
    )
    remote: str = Field(
        default="origin",
        description="Name of the primary remote",
    )
    fetch_prune: bool = Field(
        default=True,
        description="Whether to prune when fetching",
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("Timeout must be greater than zero")
        return v

    @field_validator("remote")
    @classmethod
    def validate_remote(cls, v: str) -> str:
        """Reject empty or nested remote names."""
        if not v or "/" in v:
            raise ValueError("Remote must be a plain, non-empty name")
        return v


class BranchConfig(BaseModel):
    """Branch-specific configuration."""

    default_candidates: List[str] = Field(
        default=["main", "master"],
        description="Local branch names checked, in order, for the default branch",
    )
    fallback_default: str = Field(
        default="main",
        description="Default branch reported when nothing else can be determined",
    )


class InspectorConfig(BaseSettings):
    """Configuration for repo_inspector."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_INSPECTOR_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    git: GitConfig = Field(
        default_factory=GitConfig,
        description="Git-specific configuration",
    )
    branch: BranchConfig = Field(
        default_factory=BranchConfig,
        description="Branch-specific configuration",
    )
    log_level: str = Field(
        default="INFO",
        description="Level of the repo_inspector logger",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Parameters
        ----------
        v : str
            Log level to validate

        Returns
        -------
        str
            Validated log level

        Raises
        ------
        ValueError
            If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(
                f"Invalid log level. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return v.upper()

    @classmethod
    def load_config(cls, path: Optional[str] = None) -> "InspectorConfig":
        """Load configuration from file and environment.

        Settings present in the file take precedence; anything the file leaves
        out, including single keys of a nested section, is read from the
        ``REPO_INSPECTOR_*`` environment variables and then the defaults.

        Parameters
        ----------
        path : Optional[str]
            Path to configuration file. If None, uses default location.

        Returns
        -------
        InspectorConfig
            Loaded configuration

        Raises
        ------
        ConfigError
            If configuration cannot be loaded
        """
        if path is None:
            path = str(Path.home() / ".repo_inspectorrc")

        try:
            config_path = Path(path)
            if config_path.exists():
                data = json.loads(config_path.read_text())
                if not isinstance(data, dict):
                    raise ValueError("Configuration file must contain a JSON object")
                return cls(**data)
            return cls()
        except Exception as e:
            raise ConfigError(
                message="Failed to load configuration",
                code=ErrorCode.CONFIG_INVALID,
                details=str(path),
                cause=e,
            ) from e
