"""Tests for process startup"""
from pathlib import Path

from sqlalchemy import create_engine, inspect


def test_unreachable_store_exits_with_status_1(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'no-such-dir' / 'missions.db'}")
    import start

    assert start.main() == 1
    assert "Cannot open the mission store" in capsys.readouterr().err


def test_startup_creates_schema_and_runs_menus(tmp_path: Path, monkeypatch):
    db_path = tmp_path / "missions.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    import start

    ran = []
    monkeypatch.setattr(start.MissionMenus, "run", lambda self: ran.append(self))

    assert start.main() == 0
    assert len(ran) == 1
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert {"user", "mission", "mission_member"} <= set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
