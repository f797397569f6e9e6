from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from videowalker.core.clock import utcnow
from videowalker.db.base import Base
from videowalker.models.campaign import new_id


class Winner(Base):
    __tablename__ = "winners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # no FK: winners outlive a deleted campaign. unique = one winner per campaign
    campaign_id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)

    winner_name: Mapped[str] = mapped_column(String(160), nullable=False)
    winner_email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    winner_phone: Mapped[str | None] = mapped_column(String(40), nullable=True)

    code_used: Mapped[str] = mapped_column(String(120), nullable=False)
    won_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
