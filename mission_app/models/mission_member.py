# mission_app/models/mission_member.py
from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mission_app.db import Base


class MissionMember(Base):
    __tablename__ = "mission_member"

    # composite key doubles as the unique (mission_id, member_id) pair
    mission_id: Mapped[int] = mapped_column(
        ForeignKey("mission.mission_id", ondelete="CASCADE"), primary_key=True
    )
    member_id: Mapped[int] = mapped_column(
        ForeignKey("user.user_id", ondelete="CASCADE"), primary_key=True, index=True
    )

    mission = relationship("Mission", back_populates="members")
    member = relationship("User")
