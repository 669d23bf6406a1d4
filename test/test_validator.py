"""
Tests for vote request validation.
"""

import pytest

from votearena.core.errors import (
    IdenticalContestants,
    InvalidOutcome,
    MissingContestants,
    ValidationError,
)
from votearena.core.vote import VoteChoice
from votearena.voting import validate_vote_request


class TestValidateVoteRequest:
    """Tests for validate_vote_request."""

    def test_valid_minimal(self, vote_body):
        """Test a minimal valid body."""
        request = validate_vote_request(vote_body)

        assert request.contestant_a == "acme"
        assert request.contestant_b == "globex"
        assert request.choice == VoteChoice.FIRST
        assert request.submitter_id is None
        assert request.captcha_token is None
        assert request.session_token is None

    @pytest.mark.parametrize("result,choice", [
        ("a", VoteChoice.FIRST),
        ("b", VoteChoice.SECOND),
        ("draw", VoteChoice.DRAW),
    ])
    def test_all_outcomes(self, vote_body, result, choice):
        """Test every outcome variant is accepted."""
        vote_body["result"] = result
        assert validate_vote_request(vote_body).choice == choice

    def test_optional_fields(self, vote_body):
        """Test optional fields are carried and tokens trimmed."""
        vote_body.update({
            "submittedBy": "user-1",
            "hcaptchaToken": "  captcha  ",
            "sessionToken": " session ",
        })
        request = validate_vote_request(vote_body)

        assert request.submitter_id == "user-1"
        assert request.captcha_token == "captcha"
        assert request.session_token == "session"

    def test_blank_tokens_are_absent(self, vote_body):
        """Test whitespace-only tokens count as missing."""
        vote_body.update({"hcaptchaToken": "   ", "sessionToken": ""})
        request = validate_vote_request(vote_body)

        assert request.captcha_token is None
        assert request.session_token is None

    @pytest.mark.parametrize("raw", [None, [], "vote", 42])
    def test_missing_body(self, raw):
        """Test a non-object body is rejected."""
        with pytest.raises(ValidationError, match="Missing request body."):
            validate_vote_request(raw)

    @pytest.mark.parametrize("body", [
        {"companyB": "globex", "result": "a"},
        {"companyA": "", "companyB": "globex", "result": "a"},
        {"companyA": "acme", "companyB": 7, "result": "a"},
    ])
    def test_missing_contestants(self, body):
        """Test missing or non-string identifiers are rejected."""
        with pytest.raises(MissingContestants, match="Missing company identifiers."):
            validate_vote_request(body)

    def test_identical_contestants(self):
        """Test a contestant cannot play itself."""
        with pytest.raises(IdenticalContestants, match="companyA and companyB must be different."):
            validate_vote_request({"companyA": "acme", "companyB": "acme", "result": "a"})

    @pytest.mark.parametrize("result", [None, "A", "tie", 1, ""])
    def test_invalid_outcome(self, vote_body, result):
        """Test unknown outcomes are rejected."""
        vote_body["result"] = result
        with pytest.raises(InvalidOutcome, match="Result must be one of: a, b, draw."):
            validate_vote_request(vote_body)

    def test_rules_checked_in_order(self):
        """Test identical contestants are reported before a bad outcome."""
        with pytest.raises(IdenticalContestants):
            validate_vote_request({"companyA": "acme", "companyB": "acme", "result": "tie"})

    def test_non_string_token_rejected(self, vote_body):
        """Test a non-string optional field is rejected."""
        vote_body["sessionToken"] = 123
        with pytest.raises(ValidationError, match="sessionToken must be a string."):
            validate_vote_request(vote_body)
