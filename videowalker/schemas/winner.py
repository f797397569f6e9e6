from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from videowalker.schemas.base import APIModel, UTCDateTime


class WinnerClaimIn(APIModel):
    campaign_id: str = Field(min_length=1, max_length=36)
    winner_name: str = Field(min_length=1, max_length=160)
    winner_email: Optional[str] = Field(default=None, max_length=200)
    winner_phone: Optional[str] = Field(default=None, max_length=40)
    # no strip/lower: the comparison is exact
    code_used: str = Field(min_length=1, max_length=120)
    # shown on the campaign once the win is recorded
    winner_image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("winner_name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("winnerName must not be blank")
        return v

    @field_validator("winner_email", "winner_phone", "winner_image_url")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class WinnerOut(APIModel):
    id: str
    campaign_id: str
    winner_name: str
    winner_email: Optional[str] = None
    winner_phone: Optional[str] = None
    code_used: str
    won_at: UTCDateTime

