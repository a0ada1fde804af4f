"""
Coffee Menu Backend — Admin Authorization Guard
=================================================

What:  Login, token verification, and the `require_admin` route dependency.
Why:   Every mutating endpoint must be gated; reads stay public.
How:   One static admin identity and one static opaque token, both injected
       from Settings when the guard is constructed. Tokens are compared by
       exact string equality.
Who:   Auth routes call login/verify; write routes depend on require_admin.

Credential Model:
    Single tenant, non-expiring, non-rotating. There is no session store:
    the token handed out by login is the configured ADMIN_TOKEN itself and
    stays valid until the process restarts with a different value.
    Passwords are compared in plaintext (see DESIGN.md, Open Questions).
"""

import logging
import secrets
from typing import Any, Optional

from fastapi import Header

from coffeemenu.config import Settings, settings
from coffeemenu.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _equal(a: str, b: str) -> bool:
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    "Bearer abc" → "abc"; a value without the prefix is returned as-is;
    a missing header → None.
    """
    if authorization is None:
        return None
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return authorization


class AuthService:
    """
    Guard for the single admin identity.

    Args:
        username, password: the admin login pair (case-sensitive)
        token: the opaque bearer token issued on successful login
    """

    def __init__(self, username: str, password: str, token: str):
        self._username = username
        self._password = password
        self._token = token

    @classmethod
    def from_settings(cls, config: Settings) -> "AuthService":
        return cls(
            username=config.admin_username,
            password=config.admin_password,
            token=config.admin_token,
        )

    def login(self, username: Any, password: Any) -> str:
        """
        Exchange the admin credentials for the admin token.

        Values arrive straight from the JSON body, so a number or null is
        possible; anything that is not a string is a mismatch.

        Raises:
            UnauthorizedError: a field is missing or does not match exactly
        """
        if (
            not isinstance(username, str)
            or not isinstance(password, str)
            or not _equal(username, self._username)
            or not _equal(password, self._password)
        ):
            logger.warning("Admin login rejected")
            raise UnauthorizedError(message="Invalid credentials")
        logger.info("Admin login succeeded")
        return self._token

    def verify(self, token: Optional[str]) -> bool:
        """True only when token equals the configured admin token."""
        if not token:
            return False
        return _equal(token, self._token)

    def require_admin(self, authorization: Optional[str]) -> None:
        """
        Gate a mutating request.

        Returns normally on a matching bearer token; otherwise raises
        UnauthorizedError before the handler (and any store call) runs.
        """
        if not self.verify(extract_token(authorization)):
            raise UnauthorizedError()


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService.from_settings(settings)


async def require_admin(authorization: Optional[str] = Header(default=None)) -> None:
    """FastAPI dependency wrapping AuthService.require_admin for write routes."""
    auth_service.require_admin(authorization)
