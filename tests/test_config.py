"""Tests for settings loading."""

import pytest
import yaml
from pydantic import ValidationError

from mongorule.config import MongoConfig, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MONGODB__URL", "MONGODB__DATABASE", "ENVIRONMENT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path) -> None:
    settings = Settings(_env_file=None, config_path=tmp_path / "config.yaml")

    assert settings.environment == "development"
    assert settings.mongodb.url == "mongodb://localhost:27017"
    assert settings.mongodb.database == "mongorule"
    assert settings.is_production is False


def test_nested_env_override(monkeypatch) -> None:
    monkeypatch.setenv("MONGODB__DATABASE", "tickets_prod")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = Settings(_env_file=None)

    assert settings.mongodb.database == "tickets_prod"
    assert settings.is_production is True


def test_yaml_overlay_merges_mongodb_section(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"mongodb": {"database": "from_yaml"}}))

    settings = Settings(_env_file=None, config_path=config_path)
    settings.load_yaml_config()

    assert settings.mongodb.database == "from_yaml"
    assert settings.mongodb.url == "mongodb://localhost:27017"


def test_missing_yaml_keeps_defaults(tmp_path) -> None:
    settings = Settings(_env_file=None, config_path=tmp_path / "absent.yaml")
    settings.load_yaml_config()

    assert settings.mongodb == MongoConfig()


def test_invalid_yaml_raises(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("mongodb: [unclosed")

    settings = Settings(_env_file=None, config_path=config_path)

    with pytest.raises(yaml.YAMLError):
        settings.load_yaml_config()


def test_empty_database_name_is_rejected() -> None:
    with pytest.raises(ValidationError):
        MongoConfig(database="  ")
