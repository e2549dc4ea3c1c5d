# before_you_sign/routers/auth.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.status import (
    HTTP_200_OK,
    HTTP_302_FOUND,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from ..core.config import settings
from ..core.db import get_db
from ..core.errors import request_id_of
from ..core.guards import current_session, get_session_context
from ..core.sessions import SessionContext, SessionStore, get_session_store
from ..core.template_engine import templates
from ..models.user import Role
from ..schemas.accounts import CustomerRegistration, DealershipRegistration, first_error
from ..services import accounts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

INVALID_CREDENTIALS = "Invalid username or password"

DASHBOARD_PATHS = {
    Role.ADMIN: "/admin/dashboard",
    Role.DEALERSHIP: "/dealership/dashboard",
    Role.CUSTOMER: "/customer/dashboard",
}


def dashboard_path(role: Role) -> str:
    return DASHBOARD_PATHS[role]


def _set_session_cookie(response: RedirectResponse, value: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        value,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _render_form(
    request: Request,
    template: str,
    title: str,
    error: Optional[str] = None,
    status_code: int = HTTP_200_OK,
    form: Optional[Dict[str, Any]] = None,
):
    return templates.TemplateResponse(
        request,
        template,
        {
            "title": title,
            "error": error,
            "form": form or {},
            "status_code": status_code,
            "request_id": request_id_of(request),
            "session": current_session(request),
        },
        status_code=status_code,
    )


# -----------------------------------------------------------------------------
# Home
# -----------------------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
def home(request: Request, ctx: Optional[SessionContext] = Depends(get_session_context)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": "Before You Sign - Home", "session": ctx},
    )


# -----------------------------------------------------------------------------
# Login / Logout
# -----------------------------------------------------------------------------
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, ctx: Optional[SessionContext] = Depends(get_session_context)):
    if ctx is not None:
        return RedirectResponse(url=dashboard_path(ctx.role), status_code=HTTP_302_FOUND)
    return _render_form(request, "login.html", "Login")


@router.post("/login", response_class=HTMLResponse)
def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    # registration stores the trimmed name
    username = username.strip()
    try:
        user = accounts.authenticate_user(db, username, password)
    except SQLAlchemyError:
        logger.exception("Login lookup failed for %r (request %s)", username, request_id_of(request))
        return _render_form(
            request, "login.html", "Login",
            error="Database error",
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            form={"username": username},
        )

    if user is None:
        logger.info("Failed login for %r", username)
        return _render_form(
            request, "login.html", "Login",
            error=INVALID_CREDENTIALS,
            status_code=HTTP_401_UNAUTHORIZED,
            form={"username": username},
        )

    # drop whatever session this browser held before
    store.destroy(request.cookies.get(settings.SESSION_COOKIE_NAME))
    cookie_value = store.create(
        SessionContext(user_id=user.id, username=user.username, role=user.role, email=user.email)
    )
    logger.info("User %s logged in as %s", user.username, user.role.value)

    res = RedirectResponse(url=dashboard_path(user.role), status_code=HTTP_302_FOUND)
    _set_session_cookie(res, cookie_value)
    return res


@router.get("/logout")
def logout(request: Request, store: SessionStore = Depends(get_session_store)):
    if store.destroy(request.cookies.get(settings.SESSION_COOKIE_NAME)):
        logger.info("Session destroyed on logout")
    res = RedirectResponse(url="/", status_code=HTTP_302_FOUND)
    res.delete_cookie(settings.SESSION_COOKIE_NAME)
    return res


# -----------------------------------------------------------------------------
# Registration
# -----------------------------------------------------------------------------
def _check_passwords(password: str, confirm_password: str) -> Optional[str]:
    if password != confirm_password:
        return "Passwords do not match"
    if not password:
        return "Password is required"
    return None


def _log_registration_failure(request: Request, role: str, username: str, exc: accounts.AccountError) -> None:
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "%s registration failed for %r (request %s): %s",
            role.capitalize(), username, request_id_of(request), exc.message,
        )
    else:
        logger.info("%s registration rejected for %r: %s", role.capitalize(), username, exc.message)


@router.get("/register/dealership", response_class=HTMLResponse)
def register_dealership_page(request: Request):
    return _render_form(request, "register_dealership.html", "Dealership Registration")


@router.post("/register/dealership", response_class=HTMLResponse)
def register_dealership_submit(
    request: Request,
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form("", alias="confirmPassword"),
    business_name: str = Form("", alias="businessName"),
    registration_number: str = Form("", alias="registrationNumber"),
    license_number: str = Form("", alias="licenseNumber"),
    year_established: str = Form("", alias="yearEstablished"),
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    postal_code: str = Form("", alias="postalCode"),
    website: str = Form(""),
    operating_hours: str = Form("", alias="operatingHours"),
    description: str = Form(""),
    db: Session = Depends(get_db),
):
    template, title = "register_dealership.html", "Dealership Registration"
    values = {
        "username": username, "email": email,
        "businessName": business_name, "registrationNumber": registration_number,
        "licenseNumber": license_number, "yearEstablished": year_established,
        "phone": phone, "address": address, "city": city, "postalCode": postal_code,
        "website": website, "operatingHours": operating_hours, "description": description,
    }

    error = _check_passwords(password, confirm_password)
    if error:
        return _render_form(request, template, title, error, HTTP_400_BAD_REQUEST, values)

    try:
        registration = DealershipRegistration(
            username=username,
            email=email,
            business_name=business_name,
            registration_number=registration_number,
            license_number=license_number,
            year_established=year_established,
            phone=phone,
            address=address,
            city=city,
            postal_code=postal_code,
            website=website,
            operating_hours=operating_hours,
            description=description,
        )
    except ValidationError as e:
        return _render_form(request, template, title, first_error(e), HTTP_400_BAD_REQUEST, values)

    try:
        accounts.register_dealership(db, registration, password)
    except accounts.AccountError as e:
        _log_registration_failure(request, "dealership", username, e)
        return _render_form(request, template, title, e.message, e.status_code, values)

    return RedirectResponse(url="/login", status_code=HTTP_302_FOUND)


@router.get("/register/customer", response_class=HTMLResponse)
def register_customer_page(request: Request):
    return _render_form(request, "register_customer.html", "Customer Registration")


@router.post("/register/customer", response_class=HTMLResponse)
def register_customer_submit(
    request: Request,
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form("", alias="confirmPassword"),
    full_name: str = Form("", alias="fullName"),
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    postal_code: str = Form("", alias="postalCode"),
    db: Session = Depends(get_db),
):
    template, title = "register_customer.html", "Customer Registration"
    values = {
        "username": username, "email": email, "fullName": full_name,
        "phone": phone, "address": address, "city": city, "postalCode": postal_code,
    }

    error = _check_passwords(password, confirm_password)
    if error:
        return _render_form(request, template, title, error, HTTP_400_BAD_REQUEST, values)

    try:
        registration = CustomerRegistration(
            username=username,
            email=email,
            full_name=full_name,
            phone=phone,
            address=address,
            city=city,
            postal_code=postal_code,
        )
    except ValidationError as e:
        return _render_form(request, template, title, first_error(e), HTTP_400_BAD_REQUEST, values)

    try:
        accounts.register_customer(db, registration, password)
    except accounts.AccountError as e:
        _log_registration_failure(request, "customer", username, e)
        return _render_form(request, template, title, e.message, e.status_code, values)

    return RedirectResponse(url="/login", status_code=HTTP_302_FOUND)
