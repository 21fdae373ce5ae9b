# mission_app/models/mission.py
import enum

from sqlalchemy import String, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mission_app.db import Base


class MissionStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Mission(Base):
    __tablename__ = "mission"

    mission_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MissionStatus.NOT_STARTED.value
    )
    # leader is fixed at creation
    mission_leader_id: Mapped[int] = mapped_column(
        ForeignKey("user.user_id"), nullable=False, index=True
    )

    leader = relationship("User")
    members = relationship(
        "MissionMember",
        back_populates="mission",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('not_started', 'in_progress', 'finished')",
            name="chk_valid_mission_status",
        ),
    )
