"""Security ports: password hashing and token issuing.

Both are opaque collaborators of the application layer; adapters live in
``storefront.infrastructure.security``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.user import Role, User


@dataclass(frozen=True)
class Claims:
    """What a verified token says about its bearer."""

    user_id: int
    role: Role


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a salted digest suitable for storage."""

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """True if *plaintext* matches *digest*."""


class TokenService(ABC):

    @abstractmethod
    def issue(self, user: User) -> str:
        """Return a signed bearer token for *user*."""

    @abstractmethod
    def verify(self, token: str) -> Claims:
        """Decode *token*; raises AuthenticationError if invalid or expired."""
