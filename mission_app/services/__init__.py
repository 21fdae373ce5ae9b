# mission_app/services/__init__.py
from .identity import IdentityManager
from .missions import MissionManager

__all__ = ["IdentityManager", "MissionManager"]
