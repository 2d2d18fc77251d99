"""Tests for password hashing and bearer tokens."""

from datetime import datetime, timezone

import pytest
from jose import jwt

from pitchscore.exceptions import AuthError
from pitchscore.services.security import (
    INVALID_TOKEN_MESSAGE,
    MALFORMED_CLAIMS_MESSAGE,
    MISSING_TOKEN_MESSAGE,
    create_access_token,
    decode_access_token,
    extract_bearer_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    async def test_hash_is_argon2id_and_verifies(self, password_hasher):
        hashed = await hash_password(password_hasher, "password1")

        assert hashed.startswith("$argon2id$")
        assert "password1" not in hashed
        assert await verify_password(password_hasher, hashed, "password1")

    async def test_wrong_password_does_not_verify(self, password_hasher):
        hashed = await hash_password(password_hasher, "password1")
        assert not await verify_password(password_hasher, hashed, "password2")

    async def test_garbage_hash_does_not_verify(self, password_hasher):
        assert not await verify_password(password_hasher, "not-a-hash", "password1")

    async def test_same_password_hashes_differently(self, password_hasher):
        first = await hash_password(password_hasher, "password1")
        second = await hash_password(password_hasher, "password1")
        assert first != second


class TestTokens:
    def test_round_trip_yields_claims(self, api_settings):
        token = create_access_token(api_settings, 5, "a@x.com")
        claims = decode_access_token(api_settings, token)

        assert claims.id == 5
        assert claims.email == "a@x.com"

    def test_token_carries_id_email_and_seven_day_expiry(self, api_settings):
        token = create_access_token(api_settings, 5, "a@x.com")
        payload = jwt.get_unverified_claims(token)

        assert set(payload) == {"id", "email", "exp"}
        lifetime = payload["exp"] - datetime.now(timezone.utc).timestamp()
        # a little slack for the time spent between issuing and checking
        assert 7 * 86400 - 60 < lifetime <= 7 * 86400

    def test_expired_token_is_rejected(self, api_settings):
        expired_settings = api_settings.model_copy(update={"ACCESS_TOKEN_EXPIRE_DAYS": -1})
        token = create_access_token(expired_settings, 5, "a@x.com")

        with pytest.raises(AuthError) as exc_info:
            decode_access_token(api_settings, token)
        assert exc_info.value.message == INVALID_TOKEN_MESSAGE

    def test_wrong_secret_is_rejected(self, api_settings):
        other = api_settings.model_copy(update={"JWT_SECRET": "someone-elses-secret"})
        token = create_access_token(other, 5, "a@x.com")

        with pytest.raises(AuthError):
            decode_access_token(api_settings, token)

    def test_garbage_is_rejected(self, api_settings):
        with pytest.raises(AuthError) as exc_info:
            decode_access_token(api_settings, "garbage")
        assert exc_info.value.message == INVALID_TOKEN_MESSAGE

    def test_signed_token_without_identity_claims_is_rejected(self, api_settings):
        token = jwt.encode(
            {"sub": "5"}, api_settings.JWT_SECRET, algorithm=api_settings.JWT_ALGORITHM
        )

        with pytest.raises(AuthError) as exc_info:
            decode_access_token(api_settings, token)
        assert exc_info.value.message == MALFORMED_CLAIMS_MESSAGE


class TestExtractBearerToken:
    def test_returns_token(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "abc.def.ghi", "Basic dXNlcjpwYXNz", "bearer abc"])
    def test_missing_or_other_scheme(self, header):
        with pytest.raises(AuthError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.message == MISSING_TOKEN_MESSAGE
