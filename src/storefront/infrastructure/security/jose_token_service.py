"""JWT bearer tokens signed with python-jose.

Payload: ``sub`` (user id as a string), ``role`` and ``exp``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.user import Role, User
from storefront.domain.security import Claims, TokenService


class JoseTokenService(TokenService):

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = timedelta(minutes=expire_minutes)

    def issue(self, user: User) -> str:
        payload = {
            "sub": str(user.id),
            "role": user.role.value,
            "exp": datetime.now(timezone.utc) + self._expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Claims:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise AuthenticationError("Could not validate credentials") from exc

        try:
            return Claims(user_id=int(payload["sub"]), role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Could not validate credentials") from exc
