"""Test settings loading."""

from __future__ import annotations

from prm.config import PRMSettings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("PRM_DATABASE_URL", "sqlite+aiosqlite:///other.db")
    monkeypatch.setenv("PRM_AVATAR_COLORS", "#000000, #ffffff")
    monkeypatch.setenv("PRM_GRAVATAR_TIMEOUT_SECONDS", "1.5")

    cfg = PRMSettings()

    assert cfg.database_url == "sqlite+aiosqlite:///other.db"
    assert cfg.avatar_palette == ["#000000", "#ffffff"]
    assert cfg.gravatar_timeout_seconds == 1.5


def test_default_palette_is_not_empty():
    assert len(PRMSettings().avatar_palette) == 8


def test_relative_storage_dir_is_under_project(monkeypatch):
    monkeypatch.setenv("PRM_PUBLIC_STORAGE_DIR", "uploads")
    cfg = PRMSettings()
    assert cfg.storage_dir == cfg.project_dir / "uploads"
