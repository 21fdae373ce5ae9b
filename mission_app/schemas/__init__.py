# mission_app/schemas/__init__.py
from .user import UserOut, UserName, MemberOut, Registration
from .mission import MissionCreate, MissionOut, MissionReport

__all__ = [
    "UserOut",
    "UserName",
    "MemberOut",
    "Registration",
    "MissionCreate",
    "MissionOut",
    "MissionReport",
]
