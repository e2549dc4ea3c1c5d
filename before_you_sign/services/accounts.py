"""
Account lookups and registration.

Registration writes a user row and its role profile in a single transaction:
the user is flushed first so its generated id can be referenced, and the
commit happens only after the profile insert succeeds. Any failure rolls
both back, so a user without a profile is never left behind.
"""
from __future__ import annotations

import logging
from typing import Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.security import dummy_verify, hash_password, verify_password
from ..models import CustomerProfile, DealershipProfile, Role, User
from ..schemas.accounts import AccountBase, CustomerRegistration, DealershipRegistration

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """Base for failures the registration form can report back to the user."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateAccountError(AccountError):
    status_code = 409


class ProfileCreationError(AccountError):
    status_code = 500


class StorageError(AccountError):
    status_code = 500


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user if the credentials match, else None.

    Unknown usernames still pay for a hash so both failures look alike.
    Storage errors propagate.
    """
    user = get_user_by_username(db, username)
    if user is None:
        dummy_verify()
        return None
    if not verify_password(password, user.password):
        return None
    return user


def _register(
    db: Session,
    role: Role,
    account: AccountBase,
    password: str,
    profile_model: Type,
    profile_fields: dict,
) -> User:
    user = User(
        username=account.username,
        email=str(account.email),
        password=hash_password(password),
        role=role,
    )
    label = role.value

    try:
        db.add(user)
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration rejected, username or email taken: %s", account.username)
        raise DuplicateAccountError("Username or email already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Could not create %s user %s", label, account.username)
        raise StorageError("Database error") from e

    try:
        db.add(profile_model(user_id=user.id, **profile_fields))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Could not create %s profile for %s, user rolled back", label, account.username)
        raise ProfileCreationError(f"Error creating {label} profile") from e

    db.refresh(user)
    logger.info("Registered %s account %s (id=%s)", label, user.username, user.id)
    return user


def register_dealership(db: Session, form: DealershipRegistration, password: str) -> User:
    fields = form.profile_fields()
    fields["email"] = str(fields["email"])
    return _register(db, Role.DEALERSHIP, form, password, DealershipProfile, fields)


def register_customer(db: Session, form: CustomerRegistration, password: str) -> User:
    return _register(db, Role.CUSTOMER, form, password, CustomerProfile, form.profile_fields())


def create_admin(db: Session, username: str, email: str, password: str) -> User:
    """Admins have no profile and cannot self-register."""
    user = User(username=username, email=email, password=hash_password(password), role=Role.ADMIN)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateAccountError("Username or email already exists") from e
    db.refresh(user)
    return user
