from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from videowalker.core.clock import to_naive_utc
from videowalker.schemas.base import APIModel, UTCDateTime
from videowalker.services.lifecycle import Phase


class CampaignCreate(APIModel):
    # isActive / hasWinner are not accepted here: creation always forces them
    sponsor_name: str = Field(min_length=1, max_length=160)
    sponsor_tagline: str = Field(min_length=1, max_length=240)
    sponsor_website: str = Field(min_length=1, max_length=500)
    poster_url: str = Field(min_length=1, max_length=500)

    secret_code: str = Field(min_length=1, max_length=120)
    mystery_description: str = Field(min_length=1)
    prize_value: Optional[str] = Field(default=None, max_length=60)

    countdown_end: datetime

    @field_validator("countdown_end")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class CampaignUpdate(APIModel):
    """Partial update. hasWinner, id and createdAt are not editable."""

    sponsor_name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    sponsor_tagline: Optional[str] = Field(default=None, min_length=1, max_length=240)
    sponsor_website: Optional[str] = Field(default=None, min_length=1, max_length=500)
    poster_url: Optional[str] = Field(default=None, min_length=1, max_length=500)

    secret_code: Optional[str] = Field(default=None, min_length=1, max_length=120)
    mystery_description: Optional[str] = Field(default=None, min_length=1)
    prize_value: Optional[str] = Field(default=None, max_length=60)

    countdown_end: Optional[datetime] = None
    is_active: Optional[bool] = None
    winner_image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("countdown_end")
    @classmethod
    def _utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v is not None else None


class CampaignOut(APIModel):
    id: str
    sponsor_name: str
    sponsor_tagline: str
    sponsor_website: str
    poster_url: str
    secret_code: str
    mystery_description: str
    prize_value: Optional[str] = None
    countdown_end: UTCDateTime
    is_active: bool
    has_winner: bool
    winner_image_url: Optional[str] = None
    created_at: UTCDateTime


class CampaignPublicOut(APIModel):
    id: str
    sponsor_name: str
    sponsor_tagline: str
    sponsor_website: str
    poster_url: str
    # null until the countdown ends
    secret_code: Optional[str] = None
    mystery_description: str
    prize_value: Optional[str] = None
    countdown_end: UTCDateTime
    is_active: bool
    has_winner: bool
    winner_image_url: Optional[str] = None
    created_at: UTCDateTime
    phase: Phase


class StatsOut(APIModel):
    campaigns: int
    winners: int
    live_campaigns: int
