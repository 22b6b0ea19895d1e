"""Tests for the JWT token manager."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt

from quill.configs import settings
from quill.managers.token_manager import (
    create_access_token,
    decode_access_token,
)


def expiry_of(token: str) -> datetime:
    return datetime.fromtimestamp(jwt.get_unverified_claims(token)["exp"], tz=UTC)


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_creates_valid_token(self) -> None:
        """Test that access token is created successfully."""
        token = create_access_token(user_id=uuid4(), username="alice")

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_token_contains_correct_claims(self) -> None:
        """Test that access token carries identity, issuer and audience."""
        user_id = uuid4()

        token = create_access_token(user_id=user_id, username="alice")
        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == "alice"
        assert claims["user_id"] == str(user_id)
        assert claims["iss"] == settings.JWT_ISSUER
        assert claims["aud"] == settings.JWT_AUDIENCE
        assert claims["type"] == "access"
        assert claims["jti"]

    def test_default_expiration(self) -> None:
        """Test that tokens expire after the configured lifetime."""
        token = create_access_token(user_id=uuid4(), username="alice")

        expiry = expiry_of(token)

        expected = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        assert abs((expiry - expected).total_seconds()) < 5

    def test_custom_expiration(self) -> None:
        """Test that custom expiration is respected."""
        token = create_access_token(
            user_id=uuid4(),
            username="alice",
            expires_delta=timedelta(hours=2),
        )

        expiry = expiry_of(token)

        assert abs((expiry - datetime.now(UTC) - timedelta(hours=2)).total_seconds()) < 5

    def test_each_token_has_unique_jti(self) -> None:
        """Test that two tokens for the same user differ."""
        user_id = uuid4()

        first = decode_access_token(create_access_token(user_id=user_id, username="alice"))
        second = decode_access_token(create_access_token(user_id=user_id, username="alice"))

        assert first is not None
        assert second is not None
        assert first.jti != second.jti


class TestDecodeAccessToken:
    """Test cases for decode_access_token function."""

    def test_decodes_valid_token(self) -> None:
        """Test that valid access token is decoded correctly."""
        user_id = uuid4()
        token = create_access_token(user_id=user_id, username="alice")

        token_data = decode_access_token(token)

        assert token_data is not None
        assert token_data.username == "alice"
        assert token_data.user_id == user_id
        assert token_data.token_type == "access"

    def test_rejects_invalid_token(self) -> None:
        """Test that garbage returns None."""
        assert decode_access_token("invalid.token.here") is None
        assert decode_access_token("") is None

    def test_rejects_expired_token(self, expired_token: str) -> None:
        """Test that expired token returns None."""
        assert decode_access_token(expired_token) is None

    def test_rejects_wrong_signature(self) -> None:
        """Test that a token signed with another key is rejected."""
        token = jwt.encode(
            {
                "sub": "alice",
                "user_id": str(uuid4()),
                "jti": "x",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            "some-other-secret",
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_rejects_tampered_payload(self) -> None:
        """Test that editing the payload invalidates the signature."""
        token = create_access_token(user_id=uuid4(), username="alice")
        header, payload, signature = token.split(".")
        forged = create_access_token(user_id=uuid4(), username="mallory").split(".")[1]

        assert decode_access_token(f"{header}.{forged}.{signature}") is None
        assert decode_access_token(f"{header}.{payload}.{signature}") is not None

    def test_rejects_wrong_audience(self) -> None:
        """Test that tokens minted for another audience are rejected."""
        token = jwt.encode(
            {
                "sub": "alice",
                "user_id": str(uuid4()),
                "jti": "x",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": "someone-else",
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_rejects_non_access_type(self) -> None:
        """Test that a correctly signed token of another type is rejected."""
        token = jwt.encode(
            {
                "sub": "alice",
                "user_id": str(uuid4()),
                "jti": "x",
                "type": "refresh",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_rejects_malformed_user_id(self) -> None:
        """Test that a non-UUID user_id claim is rejected."""
        token = jwt.encode(
            {
                "sub": "alice",
                "user_id": "not-a-uuid",
                "jti": "x",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None
