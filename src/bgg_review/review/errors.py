from __future__ import annotations


class YearInReviewError(Exception):
    """Base exception for failures surfaced by `compute_year_in_review`."""


class BadRequest(YearInReviewError):
    """Username or year missing/malformed."""


class NotFound(YearInReviewError):
    """Unknown user, or no plays logged in the requested year."""


class UpstreamError(YearInReviewError):
    """A BoardGameGeek request failed; `status` is None for transport failures."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
