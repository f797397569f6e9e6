"""
Campaign lifecycle.

    pending --(countdown_end)--> revealed --(+claim window)--> expired
       |                            |                               |
       +----------------------------+-------------------------------+
                        successful claim -> already_won (terminal)

The secret code is revealed at countdown_end. Claims are accepted from
that instant until the claim window closes.
"""
from __future__ import annotations

import enum
from datetime import datetime, timedelta
from typing import Protocol

from videowalker.core.config import CLAIM_WINDOW_AFTER_REVEAL


class Phase(str, enum.Enum):
    PENDING = "pending"
    REVEALED = "revealed"
    EXPIRED = "expired"
    ALREADY_WON = "already_won"


class CampaignTimes(Protocol):
    has_winner: bool
    countdown_end: datetime


def phase(
    campaign: CampaignTimes,
    now: datetime,
    claim_window: timedelta = CLAIM_WINDOW_AFTER_REVEAL,
) -> Phase:
    # is_active is not looked at: inactive campaigns are filtered by the selector
    if campaign.has_winner:
        return Phase.ALREADY_WON
    if now < campaign.countdown_end:
        return Phase.PENDING
    if now < campaign.countdown_end + claim_window:
        return Phase.REVEALED
    return Phase.EXPIRED


def is_code_visible(p: Phase) -> bool:
    return p is not Phase.PENDING


def claim_deadline(campaign: CampaignTimes, claim_window: timedelta = CLAIM_WINDOW_AFTER_REVEAL) -> datetime:
    return campaign.countdown_end + claim_window
