"""passlib and python-jose adapters."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.user import Role, User
from storefront.infrastructure.security.jose_token_service import JoseTokenService
from storefront.infrastructure.security.passlib_hasher import PasslibPasswordHasher


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = PasslibPasswordHasher()
        digest = hasher.hash("secret1")
        assert digest != "secret1"
        assert hasher.verify("secret1", digest)
        assert not hasher.verify("secret2", digest)

    def test_malformed_digest(self):
        assert not PasslibPasswordHasher().verify("secret1", "not-a-hash")


class TestTokenService:

    def _user(self) -> User:
        return User(id=5, username="alice", email="a@example.com", password_hash="x", role=Role.ADMIN)

    def test_round_trip(self):
        tokens = JoseTokenService("s3cret")
        claims = tokens.verify(tokens.issue(self._user()))
        assert claims.user_id == 5
        assert claims.role == Role.ADMIN

    def test_wrong_secret(self):
        token = JoseTokenService("s3cret").issue(self._user())
        with pytest.raises(AuthenticationError):
            JoseTokenService("other").verify(token)

    def test_expired(self):
        expired = jwt.encode(
            {"sub": "5", "role": "USER", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            "s3cret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            JoseTokenService("s3cret").verify(expired)

    def test_missing_claims(self):
        token = jwt.encode({"sub": "5"}, "s3cret", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            JoseTokenService("s3cret").verify(token)
