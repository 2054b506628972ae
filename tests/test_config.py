from __future__ import annotations

from budget_buddy import config


def test_ensure_data_directories(monkeypatch, tmp_path) -> None:
    data_dir = tmp_path / 'data'
    monkeypatch.setattr(config, 'DATA_DIR', data_dir)
    monkeypatch.setattr(config, 'BACKUP_DIR', data_dir / 'backups')
    monkeypatch.setattr(config, 'APP_DATA_FILE', tmp_path / 'elsewhere' / 'app_data.json')

    config.ensure_data_directories()

    assert (data_dir / 'backups').is_dir()
    assert (tmp_path / 'elsewhere').is_dir()


def test_default_store_path_uses_config(monkeypatch, tmp_path) -> None:
    from budget_buddy.storage import AppDataStore

    monkeypatch.setattr(config, 'APP_DATA_FILE', tmp_path / 'custom.json')
    assert AppDataStore().path == tmp_path / 'custom.json'
