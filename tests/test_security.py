"""
Token and password tests - expiry window, claims, hashing.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from replate.config import get_settings
from replate.core.dependencies import identity_from_token
from replate.core.exceptions import InvalidToken
from replate.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_token_embeds_email_and_name():
    payload = decode_access_token(create_access_token("a@x.com", "A"))
    assert payload["email"] == "a@x.com"
    assert payload["sub"] == "a@x.com"
    assert payload["name"] == "A"


def test_token_expires_one_hour_after_issue():
    issued = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = create_access_token("a@x.com", "A", issued_at=issued)
    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 3600


def test_token_accepted_just_before_expiry():
    issued = datetime.now(timezone.utc) - timedelta(minutes=59)
    assert decode_access_token(create_access_token("a@x.com", "A", issued_at=issued)) is not None


def test_token_rejected_after_expiry():
    issued = datetime.now(timezone.utc) - timedelta(minutes=61)
    token = create_access_token("a@x.com", "A", issued_at=issued)
    assert decode_access_token(token) is None
    with pytest.raises(InvalidToken):
        identity_from_token(token)


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode(
        {"email": "a@x.com", "name": "A", "exp": int(datetime.now(timezone.utc).timestamp()) + 600},
        "some-other-secret",
        algorithm=get_settings().jwt_algorithm,
    )
    with pytest.raises(InvalidToken):
        identity_from_token(forged)


def test_password_hash_roundtrip():
    hashed = hash_password("p1")
    assert hashed != "p1"
    assert verify_password("p1", hashed)
    assert not verify_password("P1", hashed)


def test_plaintext_rows_only_match_when_allowed():
    assert not verify_password("p1", "p1")
    assert verify_password("p1", "p1", allow_plaintext=True)
    assert not verify_password("p2", "p1", allow_plaintext=True)
    assert not verify_password("p1", "", allow_plaintext=True)
