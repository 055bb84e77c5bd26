import json
import pytest
from src.core.config import ConfigManager


def test_config_defaults(config):
    assert config.data.folders.save_delay_seconds == 2.0
    assert config.get("selections", "selected_folder") is None


def test_config_update_event_and_persistence(config):
    received = []
    config.on_changed.connect(lambda section, key, val: received.append((section, key, val)))

    config.update("selections", "selected_folder", "/music")

    assert received == [("selections", "selected_folder", "/music")]
    reloaded = ConfigManager(config.filepath)
    assert reloaded.get("selections", "selected_folder") == "/music"


def test_config_update_rejects_unknown_keys(config):
    with pytest.raises(ValueError):
        config.update("nope", "key", 1)
    with pytest.raises(ValueError):
        config.update("folders", "nope", 1)


def test_corrupt_config_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"folders": {"save_delay_seconds": "soon"}}), encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data.folders.save_delay_seconds == 2.0
    assert "Failed to load config" in caplog.text


def test_toml_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[folders]\nsave_delay_seconds = 0.5\nstore_path = "folders.json"\n', encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data.folders.save_delay_seconds == 0.5
    assert config.data.folders.store_path == "folders.json"
