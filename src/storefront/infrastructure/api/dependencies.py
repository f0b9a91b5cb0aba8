"""FastAPI dependencies: container access and the current user."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from storefront.application.login_user import ResolveUserHandler
from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.bootstrap import Container

# auto_error=False so a missing token goes through the domain error handler.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_uow(container: Container = Depends(get_container)) -> UnitOfWork:
    return container.unit_of_work()


def get_read_uow(container: Container = Depends(get_container)) -> UnitOfWork:
    return container.unit_of_work(read_only=True)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    container: Container = Depends(get_container),
) -> User:
    if not token:
        raise AuthenticationError("Not authenticated")
    handler = ResolveUserHandler(
        uow=container.unit_of_work(read_only=True),
        tokens=container.token_service,
    )
    return handler.handle(token)
