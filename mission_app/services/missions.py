# mission_app/services/missions.py
"""
Mission lifecycle: create, join, start, end, list and delete.

Status only moves forward (not_started -> in_progress -> finished) and
only the mission's leader may move it. Every write is conditioned in SQL
on the mission id, the leader and the expected status; when such a write
matches nothing, the row is re-read to say why (missing mission, wrong
leader, wrong status).
"""
import logging
import random
from contextlib import contextmanager
from typing import Iterator, List, Optional

from pydantic import ValidationError
from sqlalchemy import select, insert, update, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mission_app.errors import (
    ForbiddenError,
    InvalidInputError,
    MissionAppError,
    NotFoundError,
    StoreError,
)
from mission_app.models.mission import Mission, MissionStatus
from mission_app.models.mission_member import MissionMember
from mission_app.models.user import User
from mission_app.schemas.mission import MissionCreate, MissionOut, MissionReport
from mission_app.schemas.user import MemberOut

logger = logging.getLogger(__name__)

OUTCOMES = ("won", "lost")


class MissionManager:
    def __init__(self, session_factory: sessionmaker, rng: Optional[random.Random] = None):
        self._session_factory = session_factory
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        """Session that turns driver failures into StoreError after a rollback."""
        with self._session_factory() as s:
            try:
                yield s
            except MissionAppError:
                s.rollback()
                raise
            except SQLAlchemyError as e:
                s.rollback()
                logger.error(f"[missions] {action} failed: {e}")
                raise StoreError(f"Could not {action}: {e}") from e

    @staticmethod
    def _out(rows) -> List[MissionOut]:
        return [MissionOut.model_validate(m) for m in rows]

    @staticmethod
    def _explain_miss(s: Session, mission_id: int, leader_id: int, verb: str) -> MissionAppError:
        """Build the error for a leader-only write that matched zero rows."""
        m = s.get(Mission, mission_id)
        if m is None:
            return NotFoundError(f"Mission {mission_id} not found.")
        if m.mission_leader_id != leader_id:
            return ForbiddenError(f"You can't {verb} mission {mission_id}: you are not its leader.")
        return ForbiddenError(f"You can't {verb} mission {mission_id}: it is {m.status}.")

    def _leader_missions(self, leader_id: int, status: Optional[MissionStatus] = None) -> List[MissionOut]:
        q = select(Mission).where(Mission.mission_leader_id == leader_id)
        if status is not None:
            q = q.where(Mission.status == status.value)
        with self._session("list your missions") as s:
            return self._out(s.scalars(q.order_by(Mission.mission_id)).all())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_all(self) -> List[MissionOut]:
        """All missions, whoever leads them."""
        with self._session("list missions") as s:
            return self._out(s.scalars(select(Mission).order_by(Mission.mission_id)).all())

    def get(self, mission_id: int) -> MissionOut:
        with self._session("load mission") as s:
            m = s.get(Mission, mission_id)
            if m is None:
                raise NotFoundError(f"Mission {mission_id} not found.")
            return MissionOut.model_validate(m)

    def joinable(self, user_id: int) -> List[MissionOut]:
        """Missions the user neither leads nor has joined yet."""
        joined = select(MissionMember.mission_id).where(MissionMember.member_id == user_id)
        q = (
            select(Mission)
            .where(Mission.mission_id.not_in(joined), Mission.mission_leader_id != user_id)
            .order_by(Mission.mission_id)
        )
        with self._session("list joinable missions") as s:
            return self._out(s.scalars(q).all())

    def owned(self, leader_id: int) -> List[MissionOut]:
        return self._leader_missions(leader_id)

    def startable(self, leader_id: int) -> List[MissionOut]:
        return self._leader_missions(leader_id, MissionStatus.NOT_STARTED)

    def endable(self, leader_id: int) -> List[MissionOut]:
        return self._leader_missions(leader_id, MissionStatus.IN_PROGRESS)

    @staticmethod
    def _members_of(s: Session, mission_id: int) -> List[MemberOut]:
        q = (
            select(User)
            .join(MissionMember, User.user_id == MissionMember.member_id)
            .where(MissionMember.mission_id == mission_id)
            .order_by(User.user_id)
        )
        return [MemberOut.model_validate(u) for u in s.scalars(q).all()]

    def members(self, mission_id: int) -> List[MemberOut]:
        with self._session("list mission members") as s:
            return self._members_of(s, mission_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def create(self, leader_id: int, name: str) -> MissionOut:
        try:
            payload = MissionCreate(name=name, mission_leader_id=leader_id)
        except ValidationError:
            raise InvalidInputError("Mission name must not be empty.")

        with self._session("create mission") as s:
            if s.get(User, payload.mission_leader_id) is None:
                raise NotFoundError(f"User {payload.mission_leader_id} not found.")
            new_id = s.execute(
                insert(Mission).values(
                    name=payload.name,
                    status=MissionStatus.NOT_STARTED.value,
                    mission_leader_id=payload.mission_leader_id,
                ).returning(Mission.mission_id)
            ).scalar_one()
            s.commit()
            mission = MissionOut.model_validate(s.get(Mission, new_id))

        logger.info(f"[missions] User {leader_id} created mission '{mission.name}' (id={new_id})")
        return mission

    def join(self, user_id: int, mission_id: int) -> bool:
        """Add the user to the mission. Returns False if they were already a member."""
        with self._session("join mission") as s:
            m = s.get(Mission, mission_id)
            if m is None:
                raise NotFoundError(f"Mission {mission_id} not found.")
            if m.mission_leader_id == user_id:
                raise ForbiddenError("You lead this mission; leaders can't join their own mission.")
            if s.get(User, user_id) is None:
                raise NotFoundError(f"User {user_id} not found.")

            already = s.scalar(
                select(func.count())
                .select_from(MissionMember)
                .where(MissionMember.mission_id == mission_id, MissionMember.member_id == user_id)
            )
            if already:
                logger.info(f"[missions] User {user_id} already in mission {mission_id}")
                return False

            try:
                s.execute(insert(MissionMember).values(mission_id=mission_id, member_id=user_id))
                s.commit()
            except IntegrityError:
                # the pair showed up between the check and the insert
                s.rollback()
                return False

        logger.info(f"[missions] User {user_id} joined mission {mission_id}")
        return True

    def start(self, leader_id: int, mission_id: int) -> MissionOut:
        """not_started -> in_progress, leader only."""
        with self._session("start mission") as s:
            res = s.execute(
                update(Mission)
                .where(
                    Mission.mission_id == mission_id,
                    Mission.mission_leader_id == leader_id,
                    Mission.status == MissionStatus.NOT_STARTED.value,
                )
                .values(status=MissionStatus.IN_PROGRESS.value)
            )
            if res.rowcount == 0:
                s.rollback()
                err = self._explain_miss(s, mission_id, leader_id, "start")
                logger.warning(f"[missions] Start refused for user {leader_id}: {err}")
                raise err
            s.commit()
            mission = MissionOut.model_validate(s.get(Mission, mission_id))

        logger.info(f"[missions] Mission {mission_id} started by user {leader_id}")
        return mission

    def end(self, leader_id: int, mission_id: int) -> MissionReport:
        """in_progress -> finished, then draw a won/lost outcome that is not stored."""
        with self._session("end mission") as s:
            res = s.execute(
                update(Mission)
                .where(
                    Mission.mission_id == mission_id,
                    Mission.mission_leader_id == leader_id,
                    Mission.status == MissionStatus.IN_PROGRESS.value,
                )
                .values(status=MissionStatus.FINISHED.value)
            )
            if res.rowcount == 0:
                s.rollback()
                err = self._explain_miss(s, mission_id, leader_id, "end")
                logger.warning(f"[missions] End refused for user {leader_id}: {err}")
                raise err
            # members are read in the same transaction as the status change
            members = self._members_of(s, mission_id)
            s.commit()
            mission = MissionOut.model_validate(s.get(Mission, mission_id))

        report = MissionReport(
            mission=mission,
            members=members,
            outcome=self._rng.choice(OUTCOMES),
        )
        logger.info(f"[missions] Mission {mission_id} finished: {report.outcome}")
        return report

    def delete(self, leader_id: int, mission_id: int) -> MissionOut:
        """Delete a mission the caller leads, together with its membership rows."""
        with self._session("delete mission") as s:
            m = s.get(Mission, mission_id)
            if m is None or m.mission_leader_id != leader_id:
                err = self._explain_miss(s, mission_id, leader_id, "delete")
                logger.warning(f"[missions] Delete refused for user {leader_id}: {err}")
                raise err
            gone = MissionOut.model_validate(m)

            dropped = s.execute(
                delete(MissionMember).where(MissionMember.mission_id == mission_id)
            ).rowcount
            res = s.execute(
                delete(Mission).where(
                    Mission.mission_id == mission_id,
                    Mission.mission_leader_id == leader_id,
                )
            )
            if res.rowcount == 0:
                s.rollback()
                raise NotFoundError(f"Mission {mission_id} not found.")
            s.commit()

        logger.info(
            f"[missions] Mission {mission_id} deleted by user {leader_id} "
            f"({dropped} membership row(s) removed)"
        )
        return gone
