from before_you_sign.core.config import settings
from before_you_sign.core.db import SessionLocal
from before_you_sign.models import Role, User
from before_you_sign.schemas.accounts import CustomerRegistration, DealershipRegistration
from before_you_sign.services import accounts

PASSWORD = "Sup3r-secret!"


def count_rows(model) -> int:
    db = SessionLocal()
    try:
        return db.query(model).count()
    finally:
        db.close()


def get_user(username: str):
    db = SessionLocal()
    try:
        return db.query(User).filter(User.username == username).first()
    finally:
        db.close()


def make_user(role: Role, username: str, password: str = PASSWORD) -> None:
    """Create an account of any role straight through the service layer."""
    email = f"{username}@beforeyousign.co.za"
    db = SessionLocal()
    try:
        if role == Role.ADMIN:
            accounts.create_admin(db, username, email, password)
        elif role == Role.DEALERSHIP:
            form = DealershipRegistration(username=username, email=email, business_name=f"{username} Motors")
            accounts.register_dealership(db, form, password)
        else:
            form = CustomerRegistration(username=username, email=email, full_name=f"{username} Customer")
            accounts.register_customer(db, form, password)
    finally:
        db.close()


def login(client, username: str, password: str = PASSWORD):
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False,
    )


def session_cookie(response):
    return response.cookies.get(settings.SESSION_COOKIE_NAME)


def dealership_form(**overrides):
    data = {
        "username": "acme1",
        "email": "sales@acmemotors.co.za",
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "businessName": "Acme Motors",
        "registrationNumber": "2019/123456/07",
        "licenseNumber": "DL-4471",
        "yearEstablished": "2009",
        "phone": "0215550100",
        "address": "12 Voortrekker Rd",
        "city": "Cape Town",
        "postalCode": "7500",
        "website": "https://acmemotors.co.za",
        "operatingHours": "Mon-Fri 08:00-17:00",
        "description": "Pre-owned family cars.",
    }
    data.update(overrides)
    return data


def customer_form(**overrides):
    data = {
        "username": "thandi",
        "email": "thandi@mailbox.co.za",
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "fullName": "Thandi Nkosi",
        "phone": "0825550199",
        "address": "4 Long St",
        "city": "Durban",
        "postalCode": "4001",
    }
    data.update(overrides)
    return data
