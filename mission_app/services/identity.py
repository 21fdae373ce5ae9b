# mission_app/services/identity.py
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import select, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from mission_app.errors import InvalidInputError, StoreError
from mission_app.models.user import User
from mission_app.schemas.user import UserName, UserOut, Registration

logger = logging.getLogger(__name__)


def _clean_name(raw: str) -> str:
    try:
        return UserName(name=raw).name
    except ValidationError:
        raise InvalidInputError("User name must not be empty.")


class IdentityManager:
    """Registers users and resolves them by name."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def register(self, name: str) -> Registration:
        """Create the user, or hand back the existing one with ``created=False``."""
        name = _clean_name(name)
        with self._session_factory() as s:
            try:
                row = s.scalars(select(User).where(User.name == name)).first()
                if row is not None:
                    logger.info(f"[identity] User '{name}' already exists (id={row.user_id})")
                    return Registration(user=UserOut.model_validate(row), created=False)

                new_id = s.execute(
                    insert(User).values(name=name).returning(User.user_id)
                ).scalar_one()
                s.commit()
            except SQLAlchemyError as e:
                s.rollback()
                logger.error(f"[identity] Failed to register '{name}': {e}")
                raise StoreError(f"Could not register user: {e}") from e

        logger.info(f"[identity] Registered user '{name}' with id {new_id}")
        return Registration(user=UserOut(user_id=new_id, name=name), created=True)

    def authenticate(self, name: str) -> Optional[UserOut]:
        name = (name or "").strip()
        if not name:
            return None
        with self._session_factory() as s:
            try:
                row = s.scalars(select(User).where(User.name == name)).first()
            except SQLAlchemyError as e:
                logger.error(f"[identity] Lookup of '{name}' failed: {e}")
                raise StoreError(f"Could not look up user: {e}") from e
        if row is None:
            logger.warning(f"[identity] Login refused, no user named '{name}'")
            return None
        return UserOut.model_validate(row)
