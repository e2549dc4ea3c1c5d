import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.status import HTTP_302_FOUND, HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from .guards import LoginRequired, current_session
from .template_engine import templates

logger = logging.getLogger(__name__)

ERROR_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Access Denied",
    404: "Page Not Found",
    409: "Conflict",
    500: "Server Error",
}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id that error logs and error pages share."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def render_error(request: Request, status_code: int, message: str, title: str = None):
    """Render the shared error page with an explicit status code."""
    template = "404.html" if status_code == HTTP_404_NOT_FOUND else "error.html"
    return templates.TemplateResponse(
        request,
        template,
        {
            "title": title or ERROR_TITLES.get(status_code, "Error"),
            "message": message,
            "status_code": status_code,
            "request_id": request_id_of(request),
            "session": current_session(request),
        },
        status_code=status_code,
    )


async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(url="/login", status_code=HTTP_302_FOUND)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == HTTP_404_NOT_FOUND:
        message = "The page you are looking for does not exist."
        if exc.detail and exc.detail != "Not Found":
            message = exc.detail
        return render_error(request, exc.status_code, message)
    return render_error(request, exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error on %s %s (request %s)", request.method, request.url.path, request_id_of(request)
    )
    return render_error(
        request, HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong! Please try again later."
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
