"""Capability checks applied at the application boundary."""

from __future__ import annotations

from storefront.domain.exceptions import PermissionDeniedError
from storefront.domain.model.user import User


def require_admin(actor: User) -> None:
    if not actor.is_admin:
        raise PermissionDeniedError("Administrator privileges required")


def require_access(actor: User, owner_id: int, what: str) -> None:
    """Allow the owner of a resource, or any administrator."""
    if not actor.can_access(owner_id):
        raise PermissionDeniedError(f"No permission to access {what}")
