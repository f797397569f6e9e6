from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from videowalker.core.clock import get_now
from videowalker.db.session import get_db
from videowalker.models import AdminUser, Winner
from videowalker.routers.api_auth import optional_admin
from videowalker.schemas.winner import WinnerClaimIn, WinnerOut
from videowalker.services import campaigns as campaign_service
from videowalker.services.claims import submit_claim

router = APIRouter(prefix="/api/winners", tags=["Winners"])


def winner_view(w: Winner, admin: Optional[AdminUser]) -> WinnerOut:
    out = WinnerOut.model_validate(w)
    # contact details are for admins only
    if admin is None:
        out.winner_email = None
        out.winner_phone = None
    return out


@router.post("", response_model=WinnerOut, status_code=status.HTTP_201_CREATED)
def claim_win(data: WinnerClaimIn, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    """
    Claims the win for a campaign. Every rejection carries its own error code
    (see videowalker.core.errors); a retry after a successful claim gets already_won.
    """
    return submit_claim(db, data, now)


@router.get("", response_model=List[WinnerOut], response_model_exclude_none=True)
def list_winners(
    campaign_id: Optional[str] = Query(default=None, alias="campaignId"),
    db: Session = Depends(get_db),
    admin: Optional[AdminUser] = Depends(optional_admin),
):
    return [winner_view(w, admin) for w in campaign_service.list_winners(db, campaign_id)]
