import logging
import os
import sys

# SET DATABASE_URL BEFORE importing mission_app modules!
# db.py reads it at import time
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "mission_app.db")
    # SQLite URL format: sqlite:///absolute/path/to/file.db (3 slashes for absolute)
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from mission_app.cli import MissionMenus  # noqa: E402
from mission_app.db import build_engine, build_session_factory, healthcheck, init_db  # noqa: E402
from mission_app.services import IdentityManager, MissionManager  # noqa: E402

logger = logging.getLogger("mission_app")


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    kwargs = {
        "level": getattr(logging, level, logging.WARNING),
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    }
    log_file = os.getenv("LOG_FILE")
    if log_file:
        kwargs["filename"] = log_file
    logging.basicConfig(**kwargs)


def main() -> int:
    configure_logging()

    engine = build_engine(os.getenv("DATABASE_URL"))
    try:
        try:
            healthcheck(engine)
            init_db(engine)
        except SQLAlchemyError as e:
            logger.critical(f"[db] Cannot open the mission store: {e}")
            print(f"[ERROR] Cannot open the mission store: {e}", file=sys.stderr)
            return 1

        session_factory = build_session_factory(engine)
        menus = MissionMenus(
            IdentityManager(session_factory),
            MissionManager(session_factory),
        )
        menus.run()
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
