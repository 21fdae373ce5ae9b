from __future__ import annotations

from sqlalchemy import select, func

from mission_app.models import Mission, MissionMember, User


class ScriptedInput:
    """Feeds canned answers to the menus, then raises EOFError."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class FixedChoice:
    """Stand-in for random.Random that always picks the same outcome."""

    def __init__(self, value: str):
        self.value = value

    def choice(self, seq):
        assert self.value in seq
        return self.value


def count_rows(session_factory, model, *where) -> int:
    with session_factory() as s:
        q = select(func.count()).select_from(model)
        if where:
            q = q.where(*where)
        return s.scalar(q)


def user_count(session_factory) -> int:
    return count_rows(session_factory, User)


def mission_count(session_factory) -> int:
    return count_rows(session_factory, Mission)


def membership_count(session_factory, mission_id: int, member_id: int | None = None) -> int:
    where = [MissionMember.mission_id == mission_id]
    if member_id is not None:
        where.append(MissionMember.member_id == member_id)
    return count_rows(session_factory, MissionMember, *where)
