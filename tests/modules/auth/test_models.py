import pytest
from datetime import datetime, timezone

from pydantic import ValidationError

from modules.auth.models import SessionClaims


def _claims(**overrides) -> dict:
    values = {
        "sub": "user-123",
        "email": "test@example.com",
        "iss": "clipvault",
        "iat": 1_700_000_000,
        "nbf": 1_700_000_000,
        "exp": 1_700_086_400,
    }
    values.update(overrides)
    return values


class TestSessionClaims:
    def test_create_claims(self):
        """Should build claims from a decoded payload."""
        claims = SessionClaims(**_claims())
        assert claims.user_id == "user-123"
        assert claims.email == "test@example.com"
        assert claims.iss == "clipvault"

    def test_datetime_properties(self):
        """Timestamps should be exposed as aware datetimes."""
        claims = SessionClaims(**_claims())
        assert claims.issued_at == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert claims.not_before == claims.issued_at
        assert claims.expires_at.tzinfo == timezone.utc

    def test_ignores_unknown_claims(self):
        """Extra claims in the payload should be dropped."""
        claims = SessionClaims(**_claims(role="admin"))
        assert not hasattr(claims, "role")

    def test_claims_are_immutable(self):
        """Claims should not be modifiable after validation."""
        claims = SessionClaims(**_claims())
        with pytest.raises(ValidationError):
            claims.sub = "someone-else"

    def test_requires_subject(self):
        """An empty subject should be rejected."""
        with pytest.raises(ValidationError):
            SessionClaims(**_claims(sub=""))

    def test_requires_all_claims(self):
        """Missing claims should be rejected."""
        values = _claims()
        del values["nbf"]
        with pytest.raises(ValidationError):
            SessionClaims(**values)

    def test_expiry_must_follow_issue(self):
        """exp must be strictly after iat."""
        with pytest.raises(ValidationError):
            SessionClaims(**_claims(exp=1_700_000_000))
