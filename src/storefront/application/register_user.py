"""Application service: Register User use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import AuthResultDTO, to_user_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import Role, User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.security import PasswordHasher, TokenService

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class RegisterUserHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._uow = uow
        self._hasher = hasher
        self._tokens = tokens

    def handle(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> AuthResultDTO:
        """Create an account and return a token for it."""
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        user = User.register(
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            role=role,
        )

        with self._uow as uow:
            if uow.users.get_by_username(user.username) is not None:
                raise ValidationError(f"Username '{user.username}' is already taken")
            if uow.users.get_by_email(user.email) is not None:
                raise ValidationError(f"Email '{user.email}' is already registered")
            uow.users.add(user)
            uow.commit()

        logger.info("User registered", user_id=user.id, role=user.role.value)
        return AuthResultDTO(token=self._tokens.issue(user), user=to_user_dto(user))
