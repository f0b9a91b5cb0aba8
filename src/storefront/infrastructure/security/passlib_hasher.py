"""passlib-backed PasswordHasher."""

from __future__ import annotations

from passlib.context import CryptContext

from storefront.domain.security import PasswordHasher


class PasslibPasswordHasher(PasswordHasher):

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            # Unknown or malformed digest.
            return False
