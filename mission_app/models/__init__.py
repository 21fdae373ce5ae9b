# mission_app/models/__init__.py
from mission_app.db import Base

# import all model modules so tables get registered on Base.metadata
from .user import User
from .mission import Mission, MissionStatus
from .mission_member import MissionMember


__all__ = [
    "Base",
    "User",
    "Mission",
    "MissionStatus",
    "MissionMember",
]
