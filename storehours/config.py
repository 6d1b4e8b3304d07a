"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


def _validate_timezone_name(value: str) -> str:
    try:
        pendulum.timezone(value)
    except (ValueError, KeyError) as exc:
        raise ValueError(f"Unknown timezone: {value}") from exc
    return value


class ApiConfig(BaseModel):
    """Store backend settings."""
    base_url: str = "https://coding-challenge-pd-1a25b1a14f34.herokuapp.com"
    timeout_seconds: float = 10

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the request timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value


class DataFilesConfig(BaseModel):
    """Optional local JSON files used instead of the API."""
    store_times_file: Optional[Path] = None
    overrides_file: Optional[Path] = None

    @model_validator(mode="after")
    def validate_pairing(self) -> "DataFilesConfig":
        """Overrides alone make no sense without weekly hours."""
        if self.overrides_file is not None and self.store_times_file is None:
            raise ValueError("overrides_file requires store_times_file")
        return self

    @property
    def enabled(self) -> bool:
        return self.store_times_file is not None


class AppConfig(BaseModel):
    """Application configuration."""
    home_timezone: str = "America/New_York"
    use_device_timezone: bool = False
    device_timezone: Optional[str] = None  # Optional: skip device detection
    api: ApiConfig = Field(default_factory=ApiConfig)
    data: DataFilesConfig = Field(default_factory=DataFilesConfig)
    upcoming_days: int = 4
    log_level: str = "WARNING"

    @field_validator("home_timezone")
    @classmethod
    def validate_home_timezone(cls, value: str) -> str:
        return _validate_timezone_name(value)

    @field_validator("device_timezone")
    @classmethod
    def validate_device_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_timezone_name(value)

    @field_validator("upcoming_days")
    @classmethod
    def validate_upcoming_days(cls, value: int) -> int:
        """Validate the rolling window is between 1 and 31 days."""
        if not 1 <= value <= 31:
            raise ValueError(f"upcoming_days must be between 1 and 31, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read store-hours settings from a YAML file.

        Keys missing from the file keep their defaults; an empty file gives
        the default configuration.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist
            ValueError: If the YAML cannot be parsed or a setting is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Copy config.example.yaml to set home_timezone, api.base_url "
                f"or data.store_times_file."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError(
                f"{config_path} must be a mapping of settings "
                f"(home_timezone, use_device_timezone, api, data, ...)."
            )

        return cls(**data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load an explicit config file, or the default one if it exists.

        Without an explicit path and without a default file the built-in
        defaults are used.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path

