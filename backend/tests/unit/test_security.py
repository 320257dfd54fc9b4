"""Unit tests for password hashing and bearer tokens."""

import pytest

from ohshop_admin.domain.entities.user import check_password
from ohshop_admin.domain.exceptions import AuthenticationError
from ohshop_admin.infrastructure.security import JWTTokenIssuer, PasslibPasswordHasher


def test_hash_and_verify():
    hasher = PasslibPasswordHasher()
    hashed = hasher.hash("S3cret!pass")
    assert hashed != "S3cret!pass"
    assert hasher.verify("S3cret!pass", hashed)
    assert not hasher.verify("wrong", hashed)


def test_verify_rejects_malformed_hash():
    assert PasslibPasswordHasher().verify("anything", "not-a-hash") is False


def test_token_round_trip():
    issuer = JWTTokenIssuer("secret", expire_minutes=5)
    token = issuer.issue("uid-1")
    assert token.expires_in == 300
    assert issuer.read_subject(token.token) == "uid-1"


def test_expired_token():
    issuer = JWTTokenIssuer("secret", expire_minutes=-1)
    token = issuer.issue("uid-1")
    with pytest.raises(AuthenticationError, match="Token has expired"):
        issuer.read_subject(token.token)


def test_token_signed_with_another_key():
    token = JWTTokenIssuer("one").issue("uid-1")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        JWTTokenIssuer("two").read_subject(token.token)


def test_garbage_token():
    with pytest.raises(AuthenticationError):
        JWTTokenIssuer("secret").read_subject("abc.def")


def test_password_policy():
    weak = check_password("abc")
    assert weak.is_valid is False
    assert weak.strength == pytest.approx(0.2)
    assert "At least 8 characters" in weak.missing

    strong = check_password("Abcdef1!")
    assert strong.is_valid is True
    assert strong.missing == []
