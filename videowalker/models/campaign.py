import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from videowalker.core.clock import utcnow
from videowalker.db.base import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Campaign(Base):
    __tablename__ = "campaigns"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    sponsor_name: Mapped[str] = mapped_column(String(160), nullable=False)
    sponsor_tagline: Mapped[str] = mapped_column(String(240), nullable=False)
    sponsor_website: Mapped[str] = mapped_column(String(500), nullable=False)
    poster_url: Mapped[str] = mapped_column(String(500), nullable=False)

    # compared byte for byte, never normalized
    secret_code: Mapped[str] = mapped_column(String(120), nullable=False)
    mystery_description: Mapped[str] = mapped_column(Text, nullable=False)
    prize_value: Mapped[str | None] = mapped_column(String(60), nullable=True)

    countdown_end: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # only the claim processor flips this one
    has_winner: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    winner_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
