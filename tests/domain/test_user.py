"""Unit tests for the User aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import Role, User


class TestRegister:

    def test_happy_path(self):
        user = User.register("alice", " Alice@Example.COM ", "digest")
        assert user.id is None
        assert user.email == "alice@example.com"
        assert user.role == Role.USER
        assert not user.is_admin

    def test_username_length(self):
        with pytest.raises(ValidationError, match="between 3 and 50"):
            User.register("al", "al@example.com", "digest")

    def test_invalid_email(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            User.register("alice", "not-an-email", "digest")


class TestAccess:

    def test_owner_can_access(self):
        user = User(id=1, username="alice", email="a@example.com", password_hash="x")
        assert user.can_access(1)
        assert not user.can_access(2)

    def test_admin_can_access_everything(self):
        admin = User(id=1, username="root", email="r@example.com", password_hash="x", role=Role.ADMIN)
        assert admin.is_admin
        assert admin.can_access(2)
