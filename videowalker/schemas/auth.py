from __future__ import annotations

from pydantic import Field

from videowalker.schemas.base import APIModel


class LoginIn(APIModel):
    username: str = Field(..., min_length=1, max_length=80)
    password: str = Field(..., min_length=1)


class TokenOut(APIModel):
    access_token: str
    token_type: str = "bearer"
    admin_id: int
    username: str
