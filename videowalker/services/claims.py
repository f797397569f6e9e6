"""
Winner claim processing.

This is the only code path allowed to set campaigns.has_winner. The flip is a
conditional UPDATE (compare-and-set on has_winner) in the same transaction as
the winners INSERT, so two server processes racing on the same campaign can
never both record a winner.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from videowalker.core.config import CLAIM_WINDOW_AFTER_REVEAL
from videowalker.core.errors import (
    AlreadyWon,
    CampaignInactive,
    CampaignNotFound,
    ClaimError,
    ClaimNotOpen,
    ClaimWindowExpired,
    CodeMismatch,
    StorageConflict,
    StorageUnavailable,
)
from videowalker.models import Campaign, Winner
from videowalker.schemas.winner import WinnerClaimIn
from videowalker.services.lifecycle import claim_deadline

logger = logging.getLogger(__name__)


def _db_reason(e: SQLAlchemyError) -> str:
    # str(e) carries the bound parameters, which include the secret code and contacts
    orig = getattr(e, "orig", None)
    return f"{type(e).__name__}: {orig}" if orig is not None else type(e).__name__


def _load_campaign(db: Session, campaign_id: str) -> Campaign | None:
    try:
        return db.query(Campaign).filter(Campaign.id == campaign_id).first()
    except SQLAlchemyError as e:
        logger.error("campaign lookup failed for %s: %s", campaign_id, _db_reason(e))
        raise StorageUnavailable() from e


def validate_claim(
    campaign: Campaign | None,
    claim: WinnerClaimIn,
    now: datetime,
    claim_window: timedelta = CLAIM_WINDOW_AFTER_REVEAL,
) -> Campaign:
    """
    Checks a claim against the campaign as read. Order is significant:
    not found, already won, inactive, not yet revealed, wrong code, too late.
    """
    if campaign is None:
        raise CampaignNotFound()
    if campaign.has_winner:
        raise AlreadyWon()
    if not campaign.is_active:
        raise CampaignInactive()
    # before the code check so nobody can probe the code ahead of the reveal
    if now < campaign.countdown_end:
        raise ClaimNotOpen()
    if claim.code_used != campaign.secret_code:
        raise CodeMismatch()
    if now >= claim_deadline(campaign, claim_window):
        raise ClaimWindowExpired()
    return campaign


def _commit_winner(db: Session, campaign: Campaign, claim: WinnerClaimIn, now: datetime) -> Winner:
    values = {"has_winner": True}
    if claim.winner_image_url:
        values["winner_image_url"] = claim.winner_image_url

    try:
        result = db.execute(
            update(Campaign)
            .where(Campaign.id == campaign.id, Campaign.has_winner == False)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            raise StorageConflict()

        winner = Winner(
            campaign_id=campaign.id,
            winner_name=claim.winner_name,
            winner_email=claim.winner_email,
            winner_phone=claim.winner_phone,
            code_used=campaign.secret_code,
            won_at=now,
        )
        db.add(winner)
        db.commit()
    except IntegrityError as e:
        # unique winners.campaign_id: a concurrent insert got there first
        db.rollback()
        raise StorageConflict() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("claim commit failed for campaign %s: %s", claim.campaign_id, _db_reason(e))
        raise StorageUnavailable() from e

    db.refresh(winner)
    return winner


def submit_claim(
    db: Session,
    claim: WinnerClaimIn,
    now: datetime,
    claim_window: timedelta = CLAIM_WINDOW_AFTER_REVEAL,
) -> Winner:
    campaign = _load_campaign(db, claim.campaign_id)
    try:
        validate_claim(campaign, claim, now, claim_window)
    except ClaimError as e:
        logger.info("claim rejected for campaign %s: %s", claim.campaign_id, e.code)
        raise

    try:
        winner = _commit_winner(db, campaign, claim, now)
    except StorageConflict:
        logger.warning("claim for campaign %s lost the race", claim.campaign_id)
        raise

    logger.info("winner %s recorded for campaign %s", winner.id, winner.campaign_id)
    return winner
