# tests/test_persistence.py

import json

import pytest

from core.settings import SETTINGS_KEY, SettingsStore
from services.persistence import ConfigManager, StorageError


def test_missing_key_reads_none(tmp_path):
    cfg = ConfigManager(base_dir=tmp_path)
    assert cfg.get("killick-settings") is None


def test_write_then_read(tmp_path):
    cfg = ConfigManager(base_dir=tmp_path)
    cfg.set("killick-settings", '{"theme": "dark"}')
    assert cfg.get("killick-settings") == '{"theme": "dark"}'
    assert (tmp_path / "killick-settings.json").exists()
    assert not list(tmp_path.glob("*.tmp"))


def test_overwrite_keeps_backup(tmp_path):
    cfg = ConfigManager(base_dir=tmp_path)
    cfg.set("k", "one")
    cfg.set("k", "two")
    assert cfg.get("k") == "two"
    assert (tmp_path / "k.json.bak").read_text(encoding="utf-8") == "one"


def test_remove(tmp_path):
    cfg = ConfigManager(base_dir=tmp_path)
    cfg.set("k", "one")
    cfg.remove("k")
    cfg.remove("k")
    assert cfg.get("k") is None


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
def test_bad_keys_rejected(tmp_path, key):
    cfg = ConfigManager(base_dir=tmp_path)
    with pytest.raises(StorageError):
        cfg.set(key, "x")


def test_only_text_is_stored(tmp_path):
    cfg = ConfigManager(base_dir=tmp_path)
    with pytest.raises(StorageError):
        cfg.set("k", {"theme": "dark"})


def test_home_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("KILLICK_HOME", str(tmp_path / "home"))
    cfg = ConfigManager()
    assert cfg.base_dir == (tmp_path / "home").resolve()
    assert cfg.base_dir.is_dir()


def test_settings_survive_restart(tmp_path):
    store = SettingsStore(ConfigManager(base_dir=tmp_path))
    store.set("theme", "dark")
    store.set("distanceUnit", "km")

    reloaded = SettingsStore(ConfigManager(base_dir=tmp_path))
    assert reloaded.get("theme") == "dark"
    assert reloaded.get("distanceUnit") == "km"
    assert json.loads((tmp_path / f"{SETTINGS_KEY}.json").read_text(encoding="utf-8")) == reloaded.all()


def test_corrupt_file_on_disk_falls_back(tmp_path):
    (tmp_path / f"{SETTINGS_KEY}.json").write_text("{{{", encoding="utf-8")
    store = SettingsStore(ConfigManager(base_dir=tmp_path))
    assert store.get("theme") == "light"
