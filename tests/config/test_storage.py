from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from libra2dspace.config import storage


def test_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("LIBRA2DSPACE_DATA_DIR", str(custom))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()


def test_data_dir_falls_back_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("LIBRA2DSPACE_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    config = storage.get_storage_config()

    expected = (tmp_path / "xdg" / storage.APP_DIR_NAME).resolve()
    assert config.resolve_data_dir() == expected


def test_saved_table_path_creates_directories(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path / "data")

    path = config.saved_table_path("person")

    assert path == (tmp_path / "data" / "saved" / "person.json").resolve()
    assert path.parent.is_dir()


def test_saved_table_path_without_ensure_leaves_disk_untouched(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path / "data")

    path = config.saved_table_path("org_unit", ensure=False)

    assert path.name == "org_unit.json"
    assert not (tmp_path / "data").exists()
