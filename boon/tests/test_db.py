from __future__ import annotations

import pytest

from boon import db
from boon.db import StoreConfig, close_conn, get_db_path, listen_port, load_config, open_conn
from boon.errors import StoreConnectionError
from boon.schema import ensure_schema


def test_open_conn_round_trip(fresh_config):
    ensure_schema(fresh_config)
    conn = open_conn(fresh_config)
    try:
        assert conn.execute("SELECT 1 AS one").fetchone()["one"] == 1
    finally:
        close_conn(conn)


def test_open_conn_does_not_create_database(fresh_config):
    with pytest.raises(StoreConnectionError):
        open_conn(fresh_config)
    assert not fresh_config.exists()


def test_env_path_wins(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text("db_path: /from/yaml.db\n", encoding="utf-8")
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setenv("BOON_DB_PATH", "/from/env.db")
    assert get_db_path() == "/from/env.db"


def test_yaml_config(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text(
        "db_path: /from/yaml.db\ndb_timeout: 1.5\n", encoding="utf-8"
    )
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    monkeypatch.delenv("BOON_DB_PATH", raising=False)
    cfg = load_config()
    assert cfg.path == "/from/yaml.db"
    assert cfg.timeout == 1.5


def test_default_path_without_config(monkeypatch, tmp_path):
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setattr(db, "_DEFAULT_DB", str(tmp_path / "boon.db"))
    monkeypatch.delenv("BOON_DB_PATH", raising=False)
    cfg = load_config()
    assert cfg.path == str(tmp_path / "boon.db")
    assert cfg.timeout == 5.0


def test_dsn_modes(tmp_path):
    cfg = StoreConfig(path=str(tmp_path / "x.db"))
    assert cfg.dsn().startswith("file:")
    assert cfg.dsn().endswith("?mode=rw")
    assert cfg.dsn("rwc").endswith("?mode=rwc")


def test_listen_port(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert listen_port() == 8080
    monkeypatch.setenv("PORT", "9123")
    assert listen_port() == 9123
