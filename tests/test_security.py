"""Tests for password hashing and access tokens."""

import pytest
from jose import jwt

from roomchat.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from roomchat.core.settings import settings


def test_password_hash_round_trip() -> None:
    hashed = hash_password("Secret!Pass1")

    assert hashed.startswith("$argon2")
    assert verify_password(hashed, "Secret!Pass1") is True
    assert verify_password(hashed, "secret!pass1") is False


def test_verify_password_rejects_malformed_hash() -> None:
    assert verify_password("not-an-argon2-hash", "anything") is False


def test_access_token_carries_username() -> None:
    token = create_access_token("alice", {"user_type": "user"})

    assert decode_access_token(token) == "alice"
    claims = jwt.get_unverified_claims(token)
    assert claims["user_type"] == "user"
    assert claims["exp"] > 0


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode({"user_type": "user"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected() -> None:
    token = jwt.encode({"sub": "alice"}, "not-the-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)
