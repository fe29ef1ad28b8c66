"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class MongoConfig(BaseModel):
    """MongoDB connection parameters."""

    url: str = "mongodb://localhost:27017"
    database: str = "mongorule"
    server_selection_timeout_ms: int = 5000

    @field_validator("database")
    @classmethod
    def validate_database(cls, v: str) -> str:
        """Validate that the database name is provided."""
        if not v.strip():
            raise ValueError("Database name cannot be empty")
        return v


class Settings(BaseSettings):
    """Main configuration class."""

    environment: str = Field(
        default="development",
        description="Environment: development, test, production",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    logfire_token: str = ""

    # Optional YAML overlay for the nested sections below
    config_path: Path = Path("config.yaml")

    mongodb: MongoConfig = Field(default_factory=MongoConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.config_path

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            if "mongodb" in yaml_config:
                section_dict = self.mongodb.model_dump()
                section_dict.update(yaml_config["mongodb"])
                self.mongodb = MongoConfig(**section_dict)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
