from __future__ import annotations

import random
from io import StringIO
from pathlib import Path
from typing import Iterator

import pytest
from rich.console import Console
from sqlalchemy.engine import Engine

from mission_app.db import build_engine, build_session_factory, init_db
from mission_app.services import IdentityManager, MissionManager


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    eng = build_engine(f"sqlite:///{tmp_path / 'missions.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def identity(session_factory) -> IdentityManager:
    return IdentityManager(session_factory)


@pytest.fixture()
def missions(session_factory) -> MissionManager:
    return MissionManager(session_factory, rng=random.Random(7))


@pytest.fixture()
def alice(identity):
    return identity.register("alice").user


@pytest.fixture()
def bob(identity):
    return identity.register("bob").user


@pytest.fixture()
def console_buffer() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, width=120, force_terminal=False, color_system=None), buf
