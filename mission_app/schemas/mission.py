# mission_app/schemas/mission.py
from typing import List, Literal

from pydantic import BaseModel, field_validator
from pydantic.config import ConfigDict

from mission_app.models.mission import MissionStatus
from .user import MemberOut


class MissionCreate(BaseModel):
    name: str
    mission_leader_id: int

    @field_validator("name")
    @classmethod
    def _not_blank(cls, v):
        v = (v or "").strip()
        if not v:
            raise ValueError("mission name must not be empty")
        return v


class MissionOut(BaseModel):
    mission_id: int
    name: str
    status: MissionStatus
    mission_leader_id: int

    model_config = ConfigDict(from_attributes=True)


class MissionReport(BaseModel):
    """What ending a mission produces. ``outcome`` is display-only."""
    mission: MissionOut
    members: List[MemberOut] = []
    outcome: Literal["won", "lost"]
