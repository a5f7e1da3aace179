"""
Unit tests for JWT access tokens.
Covers: token creation, decoding, and every rejection path.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from blogapi.config import TestingSettings
from blogapi.errors.exceptions import ExpiredTokenError, InvalidTokenError
from blogapi.security.tokens import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_access_token,
    encode_jwt,
)


@pytest.fixture
def settings():
    return TestingSettings()


def claims(settings, **overrides):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "1",
        "role": "user",
        "type": ACCESS_TOKEN_TYPE,
        "jti": "abc",
        "iat": now,
        "exp": now + timedelta(minutes=5),
        "aud": settings.JWT_AUDIENCE,
        "iss": settings.JWT_ISSUER,
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


def test_round_trip(settings):
    token, expires_in = create_access_token(42, "admin", settings)
    payload = decode_access_token(token, settings)

    assert payload["sub"] == "42"
    assert payload["role"] == "admin"
    assert payload["type"] == "access"
    assert payload["aud"] == "blogapi"
    assert payload["iss"] == "blogapi"
    assert payload["jti"]
    assert expires_in == settings.JWT_EXPIRATION_HOURS * 3600


def test_custom_lifetime(settings):
    _, expires_in = create_access_token(1, "user", settings, timedelta(minutes=15))
    assert expires_in == 900


def test_tokens_are_unique(settings):
    first, _ = create_access_token(1, "user", settings)
    second, _ = create_access_token(1, "user", settings)
    assert first != second


def test_expired(settings):
    token, _ = create_access_token(1, "user", settings, timedelta(seconds=-1))
    with pytest.raises(ExpiredTokenError) as exc:
        decode_access_token(token, settings)
    assert exc.value.code == "EXPIRED_TOKEN"
    assert exc.value.status_code == 401


def test_wrong_secret(settings):
    other = TestingSettings(JWT_SECRET_KEY="another-secret-key-with-at-least-32-bytes")
    token, _ = create_access_token(1, "user", other)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)


def test_wrong_audience(settings):
    token = encode_jwt(claims(settings, aud="someone-else"), settings)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)


def test_garbage(settings):
    with pytest.raises(InvalidTokenError) as exc:
        decode_access_token("not.a.token", settings)
    assert exc.value.code == "INVALID_TOKEN"


def test_wrong_type(settings):
    token = encode_jwt(claims(settings, type="refresh"), settings)
    with pytest.raises(InvalidTokenError) as exc:
        decode_access_token(token, settings)
    assert exc.value.details["actual_type"] == "refresh"


def test_missing_required_claim(settings):
    payload = claims(settings)
    del payload["jti"]
    with pytest.raises(InvalidTokenError):
        decode_access_token(encode_jwt(payload, settings), settings)


def test_non_numeric_subject(settings):
    token = encode_jwt(claims(settings, sub="alice"), settings)
    with pytest.raises(InvalidTokenError) as exc:
        decode_access_token(token, settings)
    assert exc.value.message == "Token subject is not a user id"


def test_algorithm_is_enforced(settings):
    token = jwt.encode(claims(settings), settings.JWT_SECRET_KEY, algorithm="HS512")
    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)
