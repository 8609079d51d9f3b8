"""Tests for the database layer: directory handling, engine setup and schema."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy import inspect, text

import rateboard.core.db as db_module
from rateboard.core.db import (
    DEFAULT_DB_FILENAME,
    _build_sqlite_url,
    _ensure_dir,
    _resolve_db_dir,
    _resolve_sql_echo,
    bootstrap_db,
    get_engine,
    get_session,
    init_db,
)


@pytest.fixture
def mock_db_dir(monkeypatch, tmp_path):
    """Point the database at a temporary directory and clear the cached engine."""
    db_dir = tmp_path / "data"
    monkeypatch.setenv("RATEBOARD_DB_DIR", str(db_dir))
    monkeypatch.setattr(db_module, "_engine", None)
    monkeypatch.setattr(db_module, "SessionLocal", None)
    yield db_dir
    if db_module._engine is not None:
        db_module._engine.dispose()


def test_resolve_db_dir_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("RATEBOARD_DB_DIR", str(tmp_path))
    assert _resolve_db_dir() == tmp_path


def test_resolve_db_dir_defaults_to_data(monkeypatch):
    monkeypatch.delenv("RATEBOARD_DB_DIR", raising=False)
    assert _resolve_db_dir() == Path("./data")


def test_ensure_dir_creates_directory(tmp_path):
    target = tmp_path / "nested" / "dir"
    ok, reason = _ensure_dir(target)
    assert ok is True
    assert reason == ""
    assert target.is_dir()


def test_ensure_dir_reports_os_errors(tmp_path):
    with patch.object(Path, "mkdir") as mock_mkdir:
        mock_mkdir.side_effect = PermissionError("Permission denied")
        ok, reason = _ensure_dir(tmp_path / "denied")
    assert ok is False
    assert "Permission denied" in reason


def test_build_sqlite_url(tmp_path):
    url = _build_sqlite_url(tmp_path)
    assert url.startswith("sqlite:///")
    assert url.endswith(f"/{DEFAULT_DB_FILENAME}")


@pytest.mark.parametrize(
    "raw, expected",
    [("", False), ("true", True), ("1", True), ("debug", "debug"), ("false", False), ("nonsense", False)],
)
def test_resolve_sql_echo(raw, expected):
    with patch.dict(os.environ, {"LOG_SQL_ECHO": raw}):
        assert _resolve_sql_echo() == expected


def test_get_engine_is_cached_and_uses_db_dir(mock_db_dir):
    engine = get_engine()
    assert engine is get_engine()
    assert str(mock_db_dir) in str(engine.url)
    assert mock_db_dir.is_dir()


def test_get_engine_exits_when_directory_unusable(monkeypatch, mock_db_dir):
    monkeypatch.setattr(db_module, "_ensure_dir", lambda path: (False, "read-only file system"))
    with pytest.raises(SystemExit) as exc_info:
        get_engine()
    assert exc_info.value.code == 1


def test_get_session_yields_and_closes(mock_db_dir):
    session_gen = get_session()
    session = next(session_gen)
    try:
        assert session.execute(text("SELECT 1")).scalar() == 1
    finally:
        session_gen.close()


def test_init_db_creates_all_tables_idempotently(mock_db_dir):
    init_db()
    init_db()
    tables = set(inspect(get_engine()).get_table_names())
    assert {"rate_quotes", "display_settings", "banner_settings", "media_items", "promo_images"} <= tables


def test_init_db_creates_single_active_indexes(mock_db_dir):
    init_db()
    indexes = inspect(get_engine()).get_indexes("rate_quotes")
    unique = [ix for ix in indexes if ix.get("unique")]
    assert any(ix["column_names"] == ["is_active"] for ix in unique)


def test_bootstrap_db_logs_rate_count(mock_db_dir, caplog, rate_payload):
    init_db()
    with caplog.at_level("INFO", logger="rateboard.core.db"):
        bootstrap_db()
    assert "Waiting for the first rate submission" in caplog.text

    from rateboard.services import RateService

    session_gen = get_session()
    session = next(session_gen)
    try:
        RateService(session).create(rate_payload)
    finally:
        session_gen.close()

    caplog.clear()
    with caplog.at_level("INFO", logger="rateboard.core.db"):
        bootstrap_db()
    assert "Database contains 1 rate quotes." in caplog.text
