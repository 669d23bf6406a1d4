"""
Exception types for VoteArena.

Validation errors carry the user-facing message as their string form.
"""


class VoteArenaError(Exception):
    """Base class for all VoteArena errors."""


class ValidationError(VoteArenaError):
    """Malformed or contradictory vote request."""


class MissingContestants(ValidationError):
    """One or both contestant identifiers are missing."""


class IdenticalContestants(ValidationError):
    """Both contestant identifiers are the same."""


class InvalidOutcome(ValidationError):
    """The outcome discriminator is not one of the permitted variants."""


class InsufficientPool(VoteArenaError):
    """Fewer than two distinct contestants are available for a matchup."""


class SigningUnavailable(VoteArenaError):
    """No session signing secret is configured."""


class RatingEngineError(VoteArenaError):
    """The external rating engine rejected or failed to record a vote."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreError(VoteArenaError):
    """A read from the ranked-entity store failed."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
