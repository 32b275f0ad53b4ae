"""Tests for settings file handling."""

import pytest

from cluster_capabilities.exceptions import ConfigurationError, ValidationError
from cluster_capabilities.settings import (
    CONFIG_ENV_VAR,
    SettingsManager,
    SyncSettings,
    default_config_path,
)


def test_missing_file_yields_defaults(tmp_path):
    settings = SettingsManager(tmp_path / "config.yml").load()

    assert settings == SyncSettings()
    assert settings.node_pool_detection == "first"
    assert settings.log_level == "INFO"


def test_load_reads_values(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        "driver_service_url: http://drivers:8080\nnode_pool_detection: any\nlog_level: debug\n"
    )

    settings = SettingsManager(path).load()

    assert settings.driver_service_url == "http://drivers:8080"
    assert settings.node_pool_detection == "any"
    assert settings.log_level == "DEBUG"


def test_invalid_values_raise_configuration_error(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("node_pool_detection: sometimes\n")

    with pytest.raises(ConfigurationError) as exc_info:
        SettingsManager(path).load()

    assert "Invalid settings" in exc_info.value.message


def test_invalid_yaml_raises_configuration_error(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("key: [unclosed\n")

    with pytest.raises(ConfigurationError):
        SettingsManager(path).read()


def test_non_mapping_raises_configuration_error(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        SettingsManager(path).read()


def test_set_preserves_comments(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("# management cluster access\nkubeconfig: /etc/rancher/kubeconfig\n")
    manager = SettingsManager(path)

    manager.set("node_pool_detection", "any")

    content = path.read_text()
    assert "# management cluster access" in content
    assert "kubeconfig: /etc/rancher/kubeconfig" in content
    assert "node_pool_detection: any" in content


def test_set_normalizes_value(tmp_path):
    manager = SettingsManager(tmp_path / "nested" / "config.yml")

    settings = manager.set("log_level", "warning")

    assert settings.log_level == "WARNING"
    assert manager.get("log_level") == "WARNING"


def test_set_rejects_unknown_key(tmp_path):
    with pytest.raises(ValidationError) as exc_info:
        SettingsManager(tmp_path / "config.yml").set("colour", "blue")

    assert "Unknown setting" in exc_info.value.message


def test_set_rejects_invalid_value(tmp_path):
    path = tmp_path / "config.yml"

    with pytest.raises(ValidationError):
        SettingsManager(path).set("driver_service_url", "drivers:8080")

    assert not path.exists()


def test_default_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.yml"))

    assert default_config_path() == tmp_path / "custom.yml"
    assert SettingsManager().path == tmp_path / "custom.yml"
