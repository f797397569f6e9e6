"""Domain errors raised by the services and rendered by the API layer."""

from __future__ import annotations


class ContestError(Exception):
    code = "contest_error"
    status_code = 400
    message = "Request could not be processed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFoundError(ContestError):
    code = "not_found"
    status_code = 404
    message = "Resource not found."


class ClaimError(ContestError):
    """Base class for every rejected winner claim."""


class CampaignNotFound(ClaimError, NotFoundError):
    code = "campaign_not_found"
    status_code = 404
    message = "Campaign not found."


class AlreadyWon(ClaimError):
    code = "already_won"
    message = "This campaign already has a winner."


class CampaignInactive(ClaimError):
    code = "campaign_inactive"
    message = "This campaign is not active."


class ClaimNotOpen(ClaimError):
    code = "claim_not_open"
    message = "The secret code has not been revealed yet."


class CodeMismatch(ClaimError):
    code = "code_mismatch"
    message = "Invalid secret code."


class ClaimWindowExpired(ClaimError):
    code = "claim_window_expired"
    message = "The claim window for this campaign has closed."


class StorageConflict(ClaimError):
    """The conditional write lost the race: another claim won first."""

    code = "storage_conflict"
    status_code = 400
    message = "Another claim was recorded first."


class StorageUnavailable(ContestError):
    code = "storage_unavailable"
    status_code = 503
    message = "Storage is temporarily unavailable. Please retry."


class WinnerNotFound(NotFoundError):
    code = "winner_not_found"
    message = "No winner found for this campaign."
