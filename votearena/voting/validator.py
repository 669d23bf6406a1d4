"""
Vote request validation.

Pure: no network or storage access. Rules are checked in order and the
first failure wins.
"""

from typing import Any, Optional

from votearena.core.errors import (
    IdenticalContestants,
    InvalidOutcome,
    MissingContestants,
    ValidationError,
)
from votearena.core.vote import VoteChoice, VoteRequest

_CHOICES = {choice.value: choice for choice in VoteChoice}


def validate_vote_request(raw: Any) -> VoteRequest:
    """
    Validate a decoded JSON vote body.

    Expected shape:
        {companyA, companyB, result: "a"|"b"|"draw",
         submittedBy?, hcaptchaToken?, sessionToken?}

    Args:
        raw: Decoded request body

    Returns:
        VoteRequest

    Raises:
        ValidationError: With a user-facing message
    """
    if not isinstance(raw, dict):
        raise ValidationError("Missing request body.")

    company_a = raw.get("companyA")
    company_b = raw.get("companyB")
    if not _non_empty_str(company_a) or not _non_empty_str(company_b):
        raise MissingContestants("Missing company identifiers.")

    if company_a == company_b:
        raise IdenticalContestants("companyA and companyB must be different.")

    result = raw.get("result")
    choice = _CHOICES.get(result) if isinstance(result, str) else None
    if choice is None:
        raise InvalidOutcome("Result must be one of: a, b, draw.")

    return VoteRequest(
        contestant_a=company_a,
        contestant_b=company_b,
        choice=choice,
        submitter_id=_optional_str(raw, "submittedBy", strip=False),
        captcha_token=_optional_str(raw, "hcaptchaToken"),
        session_token=_optional_str(raw, "sessionToken"),
    )


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _optional_str(raw: dict, key: str, strip: bool = True) -> Optional[str]:
    """Read an optional string field; blank values become None."""
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string.")
    if strip:
        value = value.strip()
    return value or None
