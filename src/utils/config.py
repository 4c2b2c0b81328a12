"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yml"


class APIConfig(BaseModel):
    """Backend API client settings."""
    timeout: int = Field(default=30, gt=0)
    max_retries: int = Field(default=3, ge=1)
    retry_delay: int = Field(default=1, ge=0)
    exponential_backoff: bool = True


class AlertsConfig(BaseModel):
    """Expiration alert settings."""
    window_days: int = Field(default=30, gt=0)


class LoggingFilesConfig(BaseModel):
    """Log file paths."""
    dashboard: str = "logs/dashboard.log"
    api: str = "logs/api.log"
    error: str = "logs/error.log"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    console_level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5
    files: LoggingFilesConfig = LoggingFilesConfig()


class YAMLConfig(BaseModel):
    """Configuration loaded from YAML file."""
    api: APIConfig = APIConfig()
    alerts: AlertsConfig = AlertsConfig()
    logging: LoggingConfig = LoggingConfig()


class Settings(BaseSettings):
    """Application settings from environment variables."""

    inventory_api_url: str = Field(
        default="https://api.reliable.click",
        description="Base URL of the inventory backend"
    )

    environment: str = Field(default="development", description="Environment (development/production)")
    log_level: Optional[str] = Field(default=None, description="Override log level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


class AppConfig:
    """Combined application configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load environment settings and the YAML file.

        Raises:
            ConfigurationError: If the YAML file is malformed or holds invalid values
        """
        self.env = Settings()
        self.yaml = self._load_yaml(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)

        # Override log level if specified in env
        if self.env.log_level:
            self.yaml.logging.level = self.env.log_level

    @staticmethod
    def _load_yaml(config_path: Path) -> YAMLConfig:
        if not config_path.exists():
            return YAMLConfig()

        try:
            with open(config_path, "r") as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse {config_path}: {e}",
                details={"path": str(config_path)}
            )

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(
                f"{config_path} must contain a mapping of sections",
                details={"path": str(config_path)}
            )

        try:
            return YAMLConfig(**yaml_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in {config_path}: {e.error_count()} error(s)",
                details={"path": str(config_path), "errors": e.errors()}
            )

    @property
    def api(self) -> APIConfig:
        return self.yaml.api

    @property
    def alerts(self) -> AlertsConfig:
        return self.yaml.alerts

    @property
    def logging(self) -> LoggingConfig:
        return self.yaml.logging

    @property
    def is_production(self) -> bool:
        return self.env.environment.lower() == "production"


@lru_cache()
def get_config() -> AppConfig:
    """Get cached configuration instance."""
    return AppConfig()
