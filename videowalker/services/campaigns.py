"""Administrative campaign mutations."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from videowalker.core.errors import CampaignNotFound
from videowalker.models import Campaign, Winner
from videowalker.schemas.campaign import CampaignCreate, CampaignUpdate
from videowalker.services.selector import active_campaigns_query

logger = logging.getLogger(__name__)

# optional columns an explicit null may clear; null is ignored for the rest
CLEARABLE_FIELDS = {"prize_value", "winner_image_url"}


def list_campaigns(db: Session) -> List[Campaign]:
    return db.query(Campaign).order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()


def get_campaign(db: Session, campaign_id: str) -> Optional[Campaign]:
    return db.query(Campaign).filter(Campaign.id == campaign_id).first()


def require_campaign(db: Session, campaign_id: str) -> Campaign:
    c = get_campaign(db, campaign_id)
    if not c:
        raise CampaignNotFound()
    return c


def create_campaign(db: Session, data: CampaignCreate, now: datetime) -> Campaign:
    c = Campaign(
        **data.model_dump(),
        is_active=True,
        has_winner=False,
        created_at=now,
    )
    db.add(c)
    db.commit()
    db.refresh(c)

    logger.info("campaign %s created for sponsor %r", c.id, c.sponsor_name)
    return c


def update_campaign(db: Session, campaign_id: str, data: CampaignUpdate) -> Campaign:
    c = require_campaign(db, campaign_id)

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in CLEARABLE_FIELDS
    }
    for field, value in changes.items():
        setattr(c, field, value)
    db.commit()
    db.refresh(c)

    logger.info("campaign %s updated: %s", c.id, ", ".join(sorted(changes)) or "no changes")
    return c


def delete_campaign(db: Session, campaign_id: str) -> None:
    # winner rows stay: they are the audit trail
    c = require_campaign(db, campaign_id)
    db.delete(c)
    db.commit()
    logger.info("campaign %s deleted", campaign_id)


def list_winners(db: Session, campaign_id: Optional[str] = None) -> List[Winner]:
    q = db.query(Winner)
    if campaign_id:
        q = q.filter(Winner.campaign_id == campaign_id)
    return q.order_by(Winner.won_at.desc()).all()


def get_campaign_winner(db: Session, campaign_id: str) -> Optional[Winner]:
    return db.query(Winner).filter(Winner.campaign_id == campaign_id).first()


def stats(db: Session, now: datetime) -> dict:
    return {
        "campaigns": db.query(Campaign).count(),
        "winners": db.query(Winner).count(),
        "live_campaigns": active_campaigns_query(db, now).count(),
    }
