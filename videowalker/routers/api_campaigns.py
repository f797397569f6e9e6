from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from videowalker.core.clock import get_now
from videowalker.core.errors import NotFoundError, WinnerNotFound
from videowalker.db.session import get_db
from videowalker.models import AdminUser, Campaign
from videowalker.routers.api_auth import optional_admin, require_admin
from videowalker.routers.api_winners import winner_view
from videowalker.schemas.campaign import (
    CampaignCreate,
    CampaignOut,
    CampaignPublicOut,
    CampaignUpdate,
)
from videowalker.schemas.winner import WinnerOut
from videowalker.services import campaigns as campaign_service
from videowalker.services.lifecycle import is_code_visible, phase
from videowalker.services.selector import get_active_campaign

router = APIRouter(prefix="/api/campaigns", tags=["Campaigns"])


def public_view(c: Campaign, now: datetime) -> CampaignPublicOut:
    p = phase(c, now)
    return CampaignPublicOut(
        id=c.id,
        sponsor_name=c.sponsor_name,
        sponsor_tagline=c.sponsor_tagline,
        sponsor_website=c.sponsor_website,
        poster_url=c.poster_url,
        secret_code=c.secret_code if is_code_visible(p) else None,
        mystery_description=c.mystery_description,
        prize_value=c.prize_value,
        countdown_end=c.countdown_end,
        is_active=c.is_active,
        has_winner=c.has_winner,
        winner_image_url=c.winner_image_url,
        created_at=c.created_at,
        phase=p,
    )


# =========================
# Admin
# =========================
@router.get("", response_model=List[CampaignOut])
def list_campaigns(db: Session = Depends(get_db), _admin: AdminUser = Depends(require_admin)):
    return campaign_service.list_campaigns(db)


@router.post("", response_model=CampaignOut, status_code=status.HTTP_201_CREATED)
def create_campaign(
    data: CampaignCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    _admin: AdminUser = Depends(require_admin),
):
    return campaign_service.create_campaign(db, data, now)


@router.patch("/{campaign_id}", response_model=CampaignOut)
def update_campaign(
    campaign_id: str,
    data: CampaignUpdate,
    db: Session = Depends(get_db),
    _admin: AdminUser = Depends(require_admin),
):
    return campaign_service.update_campaign(db, campaign_id, data)


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campaign(
    campaign_id: str,
    db: Session = Depends(get_db),
    _admin: AdminUser = Depends(require_admin),
):
    campaign_service.delete_campaign(db, campaign_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================
# Public
# =========================
# declared before /{campaign_id} so "active" is not taken as an id
@router.get("/active", response_model=CampaignPublicOut)
def active_campaign(db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    c = get_active_campaign(db, now)
    if not c:
        raise NotFoundError("No active campaign found.")
    return public_view(c, now)


@router.get("/{campaign_id}", response_model=CampaignPublicOut)
def get_campaign(campaign_id: str, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    c = campaign_service.require_campaign(db, campaign_id)
    return public_view(c, now)


@router.get("/{campaign_id}/winner", response_model=WinnerOut, response_model_exclude_none=True)
def campaign_winner(
    campaign_id: str,
    db: Session = Depends(get_db),
    admin: Optional[AdminUser] = Depends(optional_admin),
):
    w = campaign_service.get_campaign_winner(db, campaign_id)
    if not w:
        raise WinnerNotFound()
    return winner_view(w, admin)
