from __future__ import annotations

import logging
from typing import Iterable, Tuple

from flask import Flask, g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.service import AuthService

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/health"})

# (method, path) pairs reserved to administrators
ADMIN_ONLY: Tuple[Tuple[str, str], ...] = (
    ("POST", "/cars"),
    ("POST", "/carRental"),
)


def requires_admin(method: str, path: str, rules: Iterable[Tuple[str, str]] = ADMIN_ONLY) -> bool:
    path = path.rstrip("/") or "/"
    return any(method == m and path == p for m, p in rules)


def register(app: Flask, auth_service: AuthService) -> None:
    """Install the HTTP Basic filter in front of every route.

    With ``AUTH_REQUIRED`` off (testing profile) every request passes through.
    """

    @app.before_request
    def authenticate_request():
        g.current_user = None
        if not app.config.get("AUTH_REQUIRED", True):
            return None
        if request.path in PUBLIC_PATHS:
            return None

        credentials = request.authorization
        if credentials is None or credentials.type != "basic":
            raise AuthenticationError("Authentication required")

        user = auth_service.authenticate(credentials.username or "", credentials.password or "")
        g.current_user = user

        if requires_admin(request.method, request.path) and not user.has_role(Role.ADMIN):
            logger.warning("user %s denied %s %s", user.login, request.method, request.path)
            raise AuthorizationError("Administrator role required")
        return None
