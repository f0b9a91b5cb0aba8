"""User aggregate.

Authorization is a capability check (``is_admin``) performed at the
application boundary, not a user-type hierarchy.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: int | None
    username: str
    email: str
    password_hash: str
    role: Role = Role.USER
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def register(
        username: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> User:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not 3 <= len(username.strip()) <= 50:
            raise ValidationError("Username must be between 3 and 50 characters")
        email = (email or "").strip().lower()
        if not _EMAIL_RE.match(email):
            raise ValidationError(f"Invalid email address: {email!r}")
        return User(
            id=None,
            username=username.strip(),
            email=email,
            password_hash=password_hash,
            role=role,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_access(self, owner_id: int) -> bool:
        """True if this user owns the resource or is an administrator."""
        return self.is_admin or self.id == owner_id
