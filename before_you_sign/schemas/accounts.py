from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, ValidationError, field_validator


class AccountBase(BaseModel):
    username: str
    email: EmailStr

    @field_validator("username")
    @classmethod
    def username_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class DealershipRegistration(AccountBase):
    business_name: str
    registration_number: Optional[str] = None
    license_number: Optional[str] = None
    year_established: Optional[int] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    website: Optional[str] = None
    operating_hours: Optional[str] = None
    description: Optional[str] = None

    @field_validator("business_name")
    @classmethod
    def business_name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Business name is required")
        return v

    @field_validator("year_established", mode="before")
    @classmethod
    def blank_year_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("year_established")
    @classmethod
    def year_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not (1800 <= v <= date.today().year):
            raise ValueError("Year established is not a valid year")
        return v

    def profile_fields(self) -> dict:
        return self.model_dump(exclude={"username"})


class CustomerRegistration(AccountBase):
    full_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Full name is required")
        return v

    def profile_fields(self) -> dict:
        return self.model_dump(exclude={"username", "email"})


def first_error(exc: ValidationError) -> str:
    """Human-readable message for the first failing field."""
    err = exc.errors()[0]
    msg = err.get("msg", "Invalid input")
    # pydantic prefixes messages raised from validators
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    field = ".".join(str(p) for p in err.get("loc", ()))
    if field == "email":
        return "Please enter a valid email address"
    if field == "year_established":
        return "Year established must be a number"
    return f"{field.replace('_', ' ').capitalize()}: {msg}"
