# mission_app/schemas/user.py
from pydantic import BaseModel, field_validator
from pydantic.config import ConfigDict


class UserOut(BaseModel):
    user_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MemberOut(BaseModel):
    user_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class Registration(BaseModel):
    user: UserOut
    created: bool


class UserName(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _not_blank(cls, v):
        v = (v or "").strip()
        if not v:
            raise ValueError("name must not be empty")
        return v
