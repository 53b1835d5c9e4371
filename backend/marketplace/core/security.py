"""Admin gate for mutating product operations."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable
from typing import Protocol

from fastapi import Depends, Request

from marketplace.core.config import get_settings
from marketplace.core.errors import Forbidden

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"
ADMIN_TOKEN_QUERY_PARAM = "admin_token"


class Authorizer(Protocol):
    def authorize(self, request: Request) -> bool: ...


class AllowAllAuthorizer:
    """Used when the admin gate is switched off."""

    def authorize(self, request: Request) -> bool:
        return True


class SharedSecretAuthorizer:
    """Accept requests presenting any of the configured admin tokens.

    The token is read from the ``X-Admin-Token`` header, falling back to the
    ``admin_token`` query parameter. With no tokens configured every request
    is rejected.
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens = [token.encode() for token in tokens if token]

    def authorize(self, request: Request) -> bool:
        presented = request.headers.get(ADMIN_TOKEN_HEADER) or request.query_params.get(
            ADMIN_TOKEN_QUERY_PARAM
        )
        if not presented or not self._tokens:
            return False
        candidate = presented.encode()
        # compare against every token so timing does not reveal which one matched
        matched = False
        for token in self._tokens:
            matched |= secrets.compare_digest(candidate, token)
        return matched


def get_authorizer() -> Authorizer:
    """Build the authorizer from current settings (overridable in tests)."""
    settings = get_settings()
    if not settings.admin_auth_enabled:
        return AllowAllAuthorizer()
    return SharedSecretAuthorizer(settings.admin_tokens)


def require_admin(
    request: Request,
    authorizer: Authorizer = Depends(get_authorizer),
) -> None:
    """FastAPI dependency rejecting unauthorized mutations with Forbidden."""
    if not authorizer.authorize(request):
        logger.warning(f"Rejected admin request {request.method} {request.url.path}")
        raise Forbidden()
