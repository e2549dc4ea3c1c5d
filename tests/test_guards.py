import itertools

import pytest

from before_you_sign.core.sessions import session_store
from before_you_sign.models import Role

from .utils import login, make_user

DASHBOARDS = {
    Role.ADMIN: "/admin/dashboard",
    Role.DEALERSHIP: "/dealership/dashboard",
    Role.CUSTOMER: "/customer/dashboard",
}


@pytest.mark.parametrize("path", list(DASHBOARDS.values()))
def test_anonymous_users_are_sent_to_login(client, path):
    res = client.get(path, follow_redirects=False)
    assert res.status_code == 302
    assert res.headers["location"] == "/login"


def test_forged_cookie_is_treated_as_anonymous(client):
    res = client.get(
        "/customer/dashboard",
        headers={"Cookie": "bys_session=not-a-signed-value"},
        follow_redirects=False,
    )
    assert res.status_code == 302
    assert res.headers["location"] == "/login"


@pytest.mark.parametrize(
    "session_role,route_role",
    [(a, b) for a, b in itertools.product(Role, Role) if a != b],
)
def test_role_gate_denies_every_mismatch(client, session_role, route_role):
    make_user(session_role, "someone")
    login(client, "someone")

    res = client.get(DASHBOARDS[route_role], follow_redirects=False)

    assert res.status_code == 403
    assert res.headers["content-type"].startswith("text/html")
    assert "Access denied" in res.text


@pytest.mark.parametrize("role", list(Role))
def test_role_gate_admits_matching_role(client, role):
    make_user(role, "someone")
    login(client, "someone")

    res = client.get(DASHBOARDS[role], follow_redirects=False)

    assert res.status_code == 200
    assert "someone" in res.text


def test_admin_dashboard_counts_accounts(client):
    make_user(Role.ADMIN, "boss")
    make_user(Role.DEALERSHIP, "dealer")
    make_user(Role.CUSTOMER, "buyer1")
    make_user(Role.CUSTOMER, "buyer2")
    login(client, "boss")

    res = client.get("/admin/dashboard")

    assert res.status_code == 200
    assert "dealer Motors" in res.text
    assert "buyer2 Customer" in res.text


def test_role_is_fixed_at_login(client):
    make_user(Role.CUSTOMER, "buyer")
    res = login(client, "buyer")
    ctx = session_store.get(res.cookies.get("bys_session"))
    assert ctx.role == Role.CUSTOMER
    assert client.get("/admin/dashboard", follow_redirects=False).status_code == 403
