from pathlib import Path

import pytest

from setlist.config import get_config, settings
from setlist.config.settings import Settings


def test_defaults():
    fresh = Settings(_env_file=None)

    assert fresh.database.url.startswith("sqlite+aiosqlite:///")
    assert fresh.playback.default_mode == "default"
    assert fresh.playback.default_playlist_name == "Default"
    assert fresh.playback.shuffle_seed is None
    assert fresh.logging.log_file == Path("data/logs/setlist.log")


def test_flat_keys_map_onto_sections():
    configured = Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///elsewhere.db",
        shuffle_seed=7,
        playback_mode="shuffle",
    )

    assert configured.database.url == "sqlite+aiosqlite:///elsewhere.db"
    assert configured.playback.shuffle_seed == 7
    assert configured.playback.default_mode == "shuffle"


def test_flat_environment_variables(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///elsewhere.db")
    monkeypatch.setenv("SHUFFLE_SEED", "11")

    configured = Settings(_env_file=None)

    assert configured.database.url == "sqlite+aiosqlite:///elsewhere.db"
    assert configured.playback.shuffle_seed == 11


def test_nested_environment_variable_wins_over_flat(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///flat.db")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///nested.db")

    configured = Settings(_env_file=None)

    assert configured.database.url == "sqlite+aiosqlite:///nested.db"


def test_nested_environment_variables(monkeypatch):
    monkeypatch.setenv("PLAYBACK__DEFAULT_PLAYLIST_NAME", "Library")
    monkeypatch.setenv("DATABASE__ECHO", "true")

    configured = Settings(_env_file=None)

    assert configured.playback.default_playlist_name == "Library"
    assert configured.database.echo is True


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("DATABASE_URL", lambda: settings.database.url),
        ("DEFAULT_PLAYLIST_NAME", lambda: settings.playback.default_playlist_name),
        ("DATA_DIR", lambda: settings.data_dir),
    ],
)
def test_get_config_reads_live_settings(key, expected):
    assert get_config(key) == expected()


def test_get_config_default_for_unset_and_unknown(monkeypatch):
    monkeypatch.setattr(settings.playback, "shuffle_seed", None)

    assert get_config("SHUFFLE_SEED", 0) == 0
    assert get_config("NOT_A_KEY", "fallback") == "fallback"
