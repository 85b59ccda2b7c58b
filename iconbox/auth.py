"""
Administrator session handling.

The session cookie carries the administrator secret itself; there is no
session table. A request is authorized when its ``auth_token`` cookie
equals the configured secret.
"""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Request, Response

SESSION_COOKIE = "auth_token"
SESSION_MAX_AGE = 24 * 60 * 60


def is_authorized(request: Request, secret: Optional[str]) -> bool:
    if not secret:
        return False
    token = request.cookies.get(SESSION_COOKIE)
    if token is None:
        return False
    return secrets.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


def password_matches(password: Optional[str], secret: Optional[str]) -> bool:
    if not secret or password is None:
        return False
    return secrets.compare_digest(password.encode("utf-8"), secret.encode("utf-8"))


def issue_session(response: Response, secret: str) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        secret,
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
    )

