"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.orm import UserRecord


class SqlUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> User | None:
        record = self._session.get(UserRecord, user_id)
        return self._to_domain(record) if record is not None else None

    def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRecord).where(func.lower(UserRecord.email) == email.strip().lower())
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def get_by_username(self, username: str) -> User | None:
        stmt = select(UserRecord).where(UserRecord.username == username.strip())
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def add(self, user: User) -> None:
        record = UserRecord(
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            created_at=user.created_at,
        )
        self._session.add(record)
        self._session.flush()
        user.id = record.id

    def count(self) -> int:
        return self._session.execute(select(func.count(UserRecord.id))).scalar_one()

    @staticmethod
    def _to_domain(record: UserRecord) -> User:
        created_at = record.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return User(
            id=record.id,
            username=record.username,
            email=record.email,
            password_hash=record.password_hash,
            role=record.role,
            created_at=created_at,
        )
