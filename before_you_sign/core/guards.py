import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_403_FORBIDDEN

from .config import settings
from .sessions import SessionContext, SessionStore, get_session_store
from ..models.user import Role

logger = logging.getLogger(__name__)


class LoginRequired(Exception):
    """Raised by the authenticated gate; turned into a redirect to /login."""


def get_session_context(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> Optional[SessionContext]:
    return store.get(request.cookies.get(settings.SESSION_COOKIE_NAME))


def require_login(
    ctx: Optional[SessionContext] = Depends(get_session_context),
) -> SessionContext:
    if ctx is None or not ctx.user_id:
        raise LoginRequired()
    return ctx


def require_role(role: Role):
    """Gate a route on an exact session role match."""

    def role_checker(request: Request, ctx: SessionContext = Depends(require_login)) -> SessionContext:
        if ctx.role != role:
            logger.warning(
                "Access denied: user %s with role %s requested %s (needs %s)",
                ctx.username, ctx.role.value, request.url.path, role.value,
            )
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Access denied")
        return ctx

    return role_checker


def current_session(request: Request) -> Optional[SessionContext]:
    """Session lookup for code that renders outside the dependency graph."""
    return get_session_store().get(request.cookies.get(settings.SESSION_COOKIE_NAME))
