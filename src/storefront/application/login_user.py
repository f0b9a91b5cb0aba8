"""Application services: Login and token resolution."""

from __future__ import annotations

import structlog

from storefront.application.dto import AuthResultDTO, to_user_dto
from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.security import PasswordHasher, TokenService

logger = structlog.get_logger(__name__)


class LoginUserHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._uow = uow
        self._hasher = hasher
        self._tokens = tokens

    def handle(self, email: str, password: str) -> AuthResultDTO:
        with self._uow as uow:
            user = uow.users.get_by_email((email or "").strip().lower())

        # Same message for unknown email and wrong password.
        if user is None or not self._hasher.verify(password or "", user.password_hash):
            logger.warning("Login failed", email=email)
            raise AuthenticationError("Incorrect email or password")

        logger.info("User logged in", user_id=user.id)
        return AuthResultDTO(token=self._tokens.issue(user), user=to_user_dto(user))


class ResolveUserHandler:
    """Turn a bearer token into the acting user."""

    def __init__(self, uow: UnitOfWork, tokens: TokenService) -> None:
        self._uow = uow
        self._tokens = tokens

    def handle(self, token: str) -> User:
        claims = self._tokens.verify(token)
        with self._uow as uow:
            user = uow.users.get_by_id(claims.user_id)
        if user is None:
            raise AuthenticationError("Token refers to an unknown user")
        return user
