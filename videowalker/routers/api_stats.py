from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from videowalker.core.clock import get_now
from videowalker.db.session import get_db
from videowalker.schemas.campaign import StatsOut
from videowalker.services import campaigns as campaign_service

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("", response_model=StatsOut)
def get_stats(db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    return StatsOut(**campaign_service.stats(db, now))
