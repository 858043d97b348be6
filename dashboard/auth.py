"""
Credential sign-in backed by the ``users`` table and a signed session cookie.

The session (Starlette ``SessionMiddleware``) stores only the user's id, name
and email; dashboard routes depend on ``require_user``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import bcrypt
from fastapi import Request
from pydantic import ValidationError

from dashboard.data import get_user
from dashboard.database import DatabaseError
from dashboard.schemas import Credentials, SessionUser

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


class AuthError(Exception):
    """Sign-in failed; ``type`` says why (e.g. ``CredentialsSignin``)."""

    def __init__(self, type: str, message: str = ""):
        super().__init__(message or type)
        self.type = type


class NotAuthenticated(Exception):
    pass


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


async def authorize(form: Mapping[str, Any]) -> SessionUser:
    try:
        credentials = Credentials(email=form.get("email"), password=form.get("password"))
    except ValidationError:
        raise AuthError("CredentialsSignin")

    try:
        user = await get_user(credentials.email)
    except DatabaseError as e:
        raise AuthError("CallbackRouteError", str(e)) from e

    if user is None or not verify_password(credentials.password, user.password):
        logger.info("Invalid credentials for %s", credentials.email)
        raise AuthError("CredentialsSignin")

    return SessionUser(id=str(user.id), name=user.name, email=user.email)


async def sign_in(request: Request, form: Mapping[str, Any]) -> SessionUser:
    user = await authorize(form)
    request.session[SESSION_KEY] = user.model_dump()
    logger.info("User %s signed in", user.email)
    return user


def sign_out(request: Request):
    request.session.pop(SESSION_KEY, None)


def current_user(request: Request):
    data = request.session.get(SESSION_KEY)
    return SessionUser(**data) if data else None


async def require_user(request: Request) -> SessionUser:
    """FastAPI dependency guarding /dashboard routes."""
    user = current_user(request)
    if user is None:
        raise NotAuthenticated()
    return user
