"""
Tests for ConfigManager.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from azstore.core.config_manager import (
    AzStoreConfig,
    ConfigManager,
    LogLevel,
)
from azstore.core.transport import DEFAULT_API_VERSION

ENV_VARS = [
    "AZSTORE_ACCOUNT",
    "AZSTORE_BLOB_ENDPOINT",
    "AZSTORE_API_VERSION",
    "AZSTORE_REQUEST_TIMEOUT",
    "AZSTORE_LOG_LEVEL",
    "AZSTORE_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigManager:
    """Test suite for ConfigManager."""

    def test_load_defaults(self):
        """Test loading default configuration."""
        config = ConfigManager().load()

        assert config.account is None
        assert config.blob_endpoint is None
        assert config.api_version == DEFAULT_API_VERSION
        assert config.request_timeout == 30.0
        assert config.logging.level == LogLevel.WARNING
        assert config.logging.format == "text"

    def test_load_from_yaml_file(self, tmp_path):
        """Test loading configuration from YAML file."""
        config_file = tmp_path / "azstore.yaml"
        config_file.write_text(yaml.dump({
            "account": "myaccount",
            "request_timeout": 5,
            "logging": {"level": "DEBUG", "format": "json"},
        }))

        config = ConfigManager().load(config_file=str(config_file))

        assert config.account == "myaccount"
        assert config.request_timeout == 5.0
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == "json"

    def test_load_from_json_file(self, tmp_path):
        """Test loading configuration from JSON file."""
        config_file = tmp_path / "azstore.json"
        config_file.write_text(json.dumps({"blob_endpoint": "http://127.0.0.1:10000/devstoreaccount1/"}))

        config = ConfigManager().load(config_file=str(config_file))

        assert config.blob_endpoint == "http://127.0.0.1:10000/devstoreaccount1"

    def test_empty_yaml_file(self, tmp_path):
        """Test an empty YAML file yields defaults."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        config = ConfigManager().load(config_file=str(config_file))

        assert config.api_version == DEFAULT_API_VERSION

    def test_missing_file(self):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(config_file="/nonexistent/azstore.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test unsupported file extensions are rejected."""
        config_file = tmp_path / "azstore.toml"
        config_file.write_text("account = 'x'")

        with pytest.raises(ValueError, match="Unsupported config file format"):
            ConfigManager().load(config_file=str(config_file))

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables take precedence over the file."""
        config_file = tmp_path / "azstore.yaml"
        config_file.write_text(yaml.dump({"account": "fromfile", "logging": {"format": "json"}}))
        monkeypatch.setenv("AZSTORE_ACCOUNT", "fromenv")
        monkeypatch.setenv("AZSTORE_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("AZSTORE_LOG_LEVEL", "info")

        config = ConfigManager().load(config_file=str(config_file))

        assert config.account == "fromenv"
        assert config.request_timeout == 12.5
        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == "json"

    def test_overrides_win(self, monkeypatch):
        """Test explicit overrides beat environment variables."""
        monkeypatch.setenv("AZSTORE_API_VERSION", "2017-11-09")

        config = ConfigManager().load(overrides={"api_version": "2019-02-02"})

        assert config.api_version == "2019-02-02"

    def test_get_config_before_load(self):
        """Test accessing configuration before loading."""
        with pytest.raises(RuntimeError, match="Configuration not loaded"):
            ConfigManager().get_config()

    def test_get_config_after_load(self):
        manager = ConfigManager()
        config = manager.load(overrides={"account": "a"})

        assert manager.get_config() is config

    def test_reload_rereads_file(self, tmp_path):
        """Test reload picks up file changes."""
        config_file = tmp_path / "azstore.yaml"
        config_file.write_text(yaml.dump({"account": "first"}))
        manager = ConfigManager()
        manager.load(config_file=str(config_file))

        config_file.write_text(yaml.dump({"account": "second"}))

        assert manager.reload().account == "second"


class TestAzStoreConfig:
    """Test validation of the configuration schema."""

    @pytest.mark.parametrize("version", ["2018", "latest", "2018-03-xx"])
    def test_invalid_api_version(self, version):
        with pytest.raises(ValidationError):
            AzStoreConfig(api_version=version)

    def test_invalid_endpoint_scheme(self):
        with pytest.raises(ValidationError):
            AzStoreConfig(blob_endpoint="ftp://example.com")

    def test_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AzStoreConfig(request_timeout=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            AzStoreConfig(logging={"level": "VERBOSE"})

    def test_resolved_endpoint_from_account(self):
        """Test the public endpoint is derived from the account name."""
        config = AzStoreConfig(account="myaccount")

        assert config.resolved_blob_endpoint() == "https://myaccount.blob.core.windows.net"

    def test_resolved_endpoint_prefers_explicit(self):
        config = AzStoreConfig(account="myaccount", blob_endpoint="http://localhost:10000/myaccount")

        assert config.resolved_blob_endpoint() == "http://localhost:10000/myaccount"

    def test_resolved_endpoint_requires_account_or_endpoint(self):
        with pytest.raises(ValueError, match="Either account or blob_endpoint"):
            AzStoreConfig().resolved_blob_endpoint()
