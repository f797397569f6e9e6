from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from videowalker.models import Campaign


def is_selectable(campaign: Campaign, now: datetime) -> bool:
    return campaign.is_active and not campaign.has_winner and campaign.countdown_end > now


def select_active_campaign(campaigns: Iterable[Campaign], now: datetime) -> Optional[Campaign]:
    """
    Picks the one campaign shown publicly.
    Several matches: most recently created wins, ties broken by the greater id.
    """
    candidates = [c for c in campaigns if is_selectable(c, now)]
    if not candidates:
        return None
    return max(candidates, key=lambda c: (c.created_at, c.id))


def active_campaigns_query(db: Session, now: datetime):
    return (
        db.query(Campaign)
        .filter(
            Campaign.is_active == True,
            Campaign.has_winner == False,
            Campaign.countdown_end > now,
        )
        .order_by(Campaign.created_at.desc(), Campaign.id.desc())
    )


def get_active_campaign(db: Session, now: datetime) -> Optional[Campaign]:
    return active_campaigns_query(db, now).first()
