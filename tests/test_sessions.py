from datetime import timedelta

import pytest

from before_you_sign.core import sessions
from before_you_sign.core.sessions import SessionContext, SessionStore
from before_you_sign.models import Role


@pytest.fixture
def store():
    return SessionStore("unit-test-secret", max_age_seconds=24 * 60 * 60)


@pytest.fixture
def ctx():
    return SessionContext(user_id=7, username="acme1", role=Role.DEALERSHIP, email="sales@acmemotors.co.za")


def test_create_and_get(store, ctx):
    cookie = store.create(ctx)
    assert store.get(cookie) == ctx
    assert len(store) == 1


def test_cookie_value_is_not_the_raw_id(store, ctx):
    cookie = store.create(ctx)
    assert "." in cookie  # itsdangerous payload.timestamp.signature


def test_tampered_cookie_rejected(store, ctx):
    cookie = store.create(ctx)
    assert store.get(cookie[:-2] + "xx") is None
    assert store.get("") is None
    assert store.get(None) is None


def test_cookie_from_another_secret_rejected(store, ctx):
    other = SessionStore("another-secret", max_age_seconds=60)
    cookie = other.create(ctx)
    assert store.get(cookie) is None


def test_destroy_is_idempotent(store, ctx):
    cookie = store.create(ctx)
    assert store.destroy(cookie) is True
    assert store.destroy(cookie) is False
    assert store.destroy(None) is False
    assert store.get(cookie) is None


def test_sessions_expire_after_max_age(store, ctx, monkeypatch):
    start = sessions._now()
    cookie = store.create(ctx)

    monkeypatch.setattr(sessions, "_now", lambda: start + timedelta(hours=23, minutes=59))
    assert store.get(cookie) == ctx

    monkeypatch.setattr(sessions, "_now", lambda: start + timedelta(hours=24, seconds=1))
    assert store.get(cookie) is None
    assert len(store) == 0


def test_purge_expired(store, ctx, monkeypatch):
    start = sessions._now()
    store.create(ctx)
    store.create(ctx)

    monkeypatch.setattr(sessions, "_now", lambda: start + timedelta(days=2))
    assert store.purge_expired() == 2
    assert len(store) == 0
