# mission_app/db.py
import logging
import os

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

logger = logging.getLogger(__name__)


# --- SQLAlchemy Base ---------------------------------------------------------
class Base(DeclarativeBase):
    pass


# --- Engine / Session --------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mission_app.db")
SQL_ECHO = os.getenv("SQL_ECHO", "0").lower() in ("1", "true", "yes")


def _enable_sqlite_fks(dbapi_conn, _record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def build_engine(url: str | None = None) -> Engine:
    url = url or DATABASE_URL
    engine = create_engine(url, pool_pre_ping=True, echo=SQL_ECHO, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fks)
    logger.info(f"[db] Engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_db(engine: Engine) -> None:
    """Create any missing tables."""
    # register every model on Base.metadata
    import mission_app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


# Used by start.py before the menus come up
def healthcheck(engine: Engine) -> dict:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok"}
