# mission_app/models/user.py
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from mission_app.db import Base


class User(Base):
    __tablename__ = "user"

    user_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
