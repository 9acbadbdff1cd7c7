from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catalogsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_commerce_config,
    get_database_config,
    get_sync_config,
    require_env_vars,
)
from catalogsync.config.storage import DatabaseConfig, StorageConfig
from catalogsync.domain.sync import DEFAULT_BATCH_SIZE

if TYPE_CHECKING:
    from pathlib import Path

COMMERCE_ENV = {
    "CATALOGSYNC_API_URL": "https://api.example.test/",
    "CATALOGSYNC_AUTH_URL": "https://auth.example.test",
    "CATALOGSYNC_PROJECT_KEY": "shop",
    "CATALOGSYNC_CLIENT_ID": "client",
    "CATALOGSYNC_CLIENT_SECRET": "secret",
}


def test_require_env_vars_reports_all_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRESENT_VAR", "value")
    monkeypatch.setenv("BLANK_VAR", "   ")
    monkeypatch.delenv("ABSENT_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["PRESENT_VAR", "BLANK_VAR", "ABSENT_VAR"])

    assert str(exc.value) == "Missing configuration for: ABSENT_VAR, BLANK_VAR"


def test_sync_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOGSYNC_BATCH_SIZE", raising=False)

    assert get_sync_config().batch_size == DEFAULT_BATCH_SIZE


def test_sync_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOGSYNC_BATCH_SIZE", "20")

    assert get_sync_config().batch_size == 20
    assert get_sync_config(batch_size=5).batch_size == 5


@pytest.mark.parametrize("raw", ["zero", "0", "-3"])
def test_sync_config_rejects_invalid_batch_size(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("CATALOGSYNC_BATCH_SIZE", raw)

    with pytest.raises(ConfigurationError):
        get_sync_config()


def test_commerce_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in COMMERCE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("CATALOGSYNC_SCOPES", raising=False)

    config = get_commerce_config()

    assert config.api_url == "https://api.example.test"
    assert config.scopes == ("manage_project:shop",)
    assert config.resilience.base_url == "https://api.example.test/shop"
    assert config.resilience.ratelimit is not None


def test_commerce_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in COMMERCE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("CATALOGSYNC_CLIENT_SECRET")

    with pytest.raises(MissingConfigurationError, match="CATALOGSYNC_CLIENT_SECRET"):
        get_commerce_config()


def test_database_config_prefers_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql://example/catalog")

    assert get_database_config().uri == "postgresql://example/catalog"


def test_database_config_falls_back_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    storage = StorageConfig(data_dir=tmp_path)

    uri = get_database_config(storage=storage).uri

    assert uri.startswith("sqlite+pysqlite:///")
    assert uri.endswith("catalogsync.db")


def test_explicit_database_uri_beats_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql://example/catalog")

    assert get_database_config(uri="sqlite://").uri == "sqlite://"


def test_data_dir_comes_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("CATALOGSYNC_DATA_DIR", str(tmp_path / "data"))

    uri = get_database_config().uri

    data_dir = (tmp_path / "data").resolve()
    assert uri == f"sqlite+pysqlite:///{data_dir / 'catalogsync.db'}"
    assert data_dir.is_dir()


def test_only_sqlite_engines_share_connections_across_threads() -> None:
    assert DatabaseConfig(uri="sqlite+pysqlite:///catalog.db").engine_options() == {
        "connect_args": {"check_same_thread": False}
    }
    assert DatabaseConfig(uri="postgresql://example/catalog").engine_options() == {}
