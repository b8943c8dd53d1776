from datetime import timedelta

import pytest

from tenantgate.app.services.token_crypto import (
    EXPIRED,
    INVALID_SIGNATURE,
    generate_secret,
    hash_secret,
    secrets_match,
    sign_identity,
    verify_identity,
)
from tenantgate.domain.base import utc_now

SECRET = "unit-test-signing-secret"
CLAIMS = {"tenant_id": "8a6e0804-2bd0-4672-b79d-d97027f9071a", "email": "owner@acme.com"}


def _tampered_variants(token: str):
    """Yield the token with one character replaced, for every data character

    The last character of each segment is skipped: base64url may carry
    unused padding bits there, so a change can decode to the same bytes.
    """
    segment_ends = set()
    offset = 0
    for segment in token.split("."):
        offset += len(segment)
        segment_ends.add(offset - 1)
        offset += 1

    for index, char in enumerate(token):
        if char == "." or index in segment_ends:
            continue
        replacement = "B" if char == "A" else "A"
        yield token[:index] + replacement + token[index + 1:]


def test_generate_secret_is_random_256_bit_hex():
    first = generate_secret()
    second = generate_secret()

    assert len(first) == 64
    int(first, 16)
    assert first != second


def test_hash_secret_is_deterministic_and_one_way():
    secret = generate_secret()

    assert hash_secret(secret) == hash_secret(secret)
    assert hash_secret(secret) != secret
    assert len(hash_secret(secret)) == 64


def test_secrets_match():
    digest = hash_secret("abc")

    assert secrets_match(digest, digest)
    assert not secrets_match(digest, hash_secret("abd"))
    assert not secrets_match(digest, None)
    assert not secrets_match(digest, "")


def test_sign_and_verify_returns_claims():
    token = sign_identity(CLAIMS, timedelta(days=7), secret=SECRET)

    result = verify_identity(token, secret=SECRET)

    assert result.is_ok()
    assert result.value["tenant_id"] == CLAIMS["tenant_id"]
    assert result.value["email"] == CLAIMS["email"]
    assert "exp" in result.value
    assert "iat" in result.value


def test_verify_expired_token():
    issued = utc_now() - timedelta(days=8)
    token = sign_identity(CLAIMS, timedelta(days=7), secret=SECRET, now=issued)

    result = verify_identity(token, secret=SECRET)

    assert result.is_err()
    assert result.error.code == EXPIRED


def test_verify_token_signed_with_other_secret():
    token = sign_identity(CLAIMS, timedelta(days=7), secret="another-secret")

    result = verify_identity(token, secret=SECRET)

    assert result.is_err()
    assert result.error.code == INVALID_SIGNATURE


def test_every_single_character_change_is_rejected():
    token = sign_identity(CLAIMS, timedelta(days=7), secret=SECRET)

    for tampered in _tampered_variants(token):
        assert tampered != token
        result = verify_identity(tampered, secret=SECRET)
        assert result.is_err(), f"tampered token accepted: {tampered}"
        assert result.error.code == INVALID_SIGNATURE


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "...."])
def test_malformed_tokens_are_rejected(garbage):
    result = verify_identity(garbage, secret=SECRET)

    assert result.is_err()
    assert result.error.code == INVALID_SIGNATURE
