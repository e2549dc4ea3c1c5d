import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from before_you_sign.core.db import Base, engine
from before_you_sign.core.sessions import session_store
from before_you_sign.main import app
from before_you_sign.models import CustomerProfile, DealershipProfile


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.create_all(bind=engine)
    session_store.clear()
    yield
    session_store.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_profile_insert():
    """Make every profile INSERT blow up inside the flush."""

    def boom(mapper, connection, target):
        raise SQLAlchemyError("simulated profile insert failure")

    models = (DealershipProfile, CustomerProfile)
    for model in models:
        event.listen(model, "before_insert", boom)
    yield
    for model in models:
        event.remove(model, "before_insert", boom)
