from datetime import timedelta

import pytest

from app.config import Settings
from app.schemas.auth import AccessClaims, RefreshClaims
from app.services.errors import InvalidToken
from app.services.tokens import REFRESH, TokenSigner, hash_token, parse_ttl


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("30s", timedelta(seconds=30)),
        ("15m", timedelta(minutes=15)),
        ("2h", timedelta(hours=2)),
        ("7d", timedelta(days=7)),
        ("7 days", timedelta(minutes=15)),
        ("", timedelta(minutes=15)),
    ],
)
def test_parse_ttl(value, expected):
    assert parse_ttl(value) == expected


def test_signer_reads_ttls_from_settings():
    settings = Settings(
        secret_key="0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef",
        jwt_access_expires="5m",
        jwt_refresh_expires="1d",
    )
    signer = TokenSigner.from_settings(settings)

    assert signer.access_ttl == timedelta(minutes=5)
    assert signer.refresh_ttl == timedelta(days=1)


def test_access_token_round_trip(signer):
    token = signer.sign_access(AccessClaims(user_id="u-1", email="u@example.com"))

    claims = signer.verify_access(token)
    assert claims == AccessClaims(user_id="u-1", email="u@example.com")


def test_refresh_token_carries_session_and_version(signer):
    token = signer.sign_refresh(
        RefreshClaims(user_id="u-1", email="u@example.com", token_version=3, session_id="sid")
    )

    claims = signer.verify_refresh(token)
    assert claims.session_id == "sid"
    assert claims.token_version == 3


def test_verify_rejects_wrong_token_type(signer):
    access = signer.sign_access(AccessClaims(user_id="u-1", email="u@example.com"))

    with pytest.raises(InvalidToken):
        signer.verify_refresh(access)


def test_verify_rejects_other_secret(signer):
    other = TokenSigner(secret_key="another-secret-0123456789abcdefghijklmnop")
    token = other.sign_access(AccessClaims(user_id="u-1", email="u@example.com"))

    with pytest.raises(InvalidToken):
        signer.verify(token)


def test_verify_rejects_expired(signer):
    token = signer.sign_refresh(
        RefreshClaims(user_id="u-1", email="u@example.com", session_id="sid"),
        ttl=timedelta(seconds=-5),
    )

    with pytest.raises(InvalidToken):
        signer.verify(token)


def test_verify_rejects_missing_session_id(signer):
    token = signer._encode({"sub": "u-1", "email": "u@example.com"}, REFRESH, timedelta(minutes=1))

    with pytest.raises(InvalidToken):
        signer.verify_refresh(token)


def test_verify_rejects_garbage(signer):
    for token in ("", "abc", "a.b.c"):
        with pytest.raises(InvalidToken):
            signer.verify(token)


def test_hash_token_is_sha256_hex():
    digest = hash_token("token")
    assert len(digest) == 64
    assert digest == hash_token("token")
    assert digest != hash_token("token2")
