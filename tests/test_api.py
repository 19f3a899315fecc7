from fastapi.testclient import TestClient

from elnursery.models.principal import PrincipalType
from elnursery_web.access import ACCESS_RULES, PUBLIC
from elnursery_web.main import create_app

VALID_PASSWORD = "N3w!Passw"


def auth_headers(app, principal_type, email, password):
    token, _ = app.auth_service.login(email, password, principal_type)
    return {"Authorization": f"Bearer {token}"}


def _admin_headers(elnursery_app, make_admin):
    admin, password = make_admin()
    return auth_headers(elnursery_app, PrincipalType.ADMIN, admin.email, password)


def _user_headers(elnursery_app, make_user, **kwargs):
    user, password = make_user(**kwargs)
    return user, auth_headers(elnursery_app, PrincipalType.USER, user.email, password)


def test_health_is_public(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_login_sets_cookie_used_by_later_requests(client, make_admin):
    admin, password = make_admin()

    res = client.post("/auth/login/admin", json={"email": admin.email, "password": password})

    assert res.status_code == 200, res.text
    assert res.json()["message"] == "Login successful"
    assert "token" in res.cookies
    assert "httponly" in res.headers["set-cookie"].lower()

    res_admins = client.get("/admin")
    assert res_admins.status_code == 200
    assert [a["email"] for a in res_admins.json()] == [admin.email]


def test_login_failure(client, make_user):
    user, _ = make_user()
    res = client.post("/auth/login/user", json={"email": user.email, "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"detail": "Invalid credentials"}


def test_login_unknown_principal_type(client):
    res = client.post("/auth/login/robot", json={"email": "a@example.com", "password": "x"})
    assert res.status_code == 422


def test_logout_clears_cookie(client, make_user):
    user, password = make_user()
    client.post("/auth/login/user", json={"email": user.email, "password": password})

    res = client.post("/auth/logout")

    assert res.status_code == 200
    assert res.json() == {"message": "Logout successful"}
    assert 'token=""' in res.headers["set-cookie"] or "max-age=0" in res.headers["set-cookie"].lower()


def test_gate_without_token(client):
    res = client.get("/admin")
    assert res.status_code == 401
    assert res.json() == {"detail": "Please login to access this resource"}


def test_gate_with_bad_token(client):
    res = client.get("/admin", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json() == {"detail": "Failed to authenticate token"}


def test_gate_wrong_principal_type(client, elnursery_app, make_user):
    _, headers = _user_headers(elnursery_app, make_user)
    res = client.get("/admin", headers=headers)
    assert res.status_code == 403
    assert res.json() == {"detail": "user is not allowed to access this resource"}


def test_every_public_rule_is_login_health_or_password():
    public = {name for name, rule in ACCESS_RULES.items() if rule is PUBLIC}
    assert public == {"health", "auth.login", "password.reset", "password.change_by_token"}


def test_admin_creates_user_without_leaking_password(client, elnursery_app, make_admin, email_service):
    headers = _admin_headers(elnursery_app, make_admin)

    res = client.post(
        "/user",
        json={"name": "Parent", "email": "parent@example.com", "class": "Sunflowers", "children": 2},
        headers=headers,
    )

    assert res.status_code == 201, res.text
    body = res.json()
    assert body["class"] == "Sunflowers"
    assert body["children"] == 2
    assert "password" not in body
    assert "forget_password_token" not in body
    email_service.send_account_credentials.assert_called()


def test_create_admin_duplicate_returns_conflict(client, elnursery_app, make_admin):
    headers = _admin_headers(elnursery_app, make_admin)
    res = client.post("/admin", json={"name": "Dup", "email": "admin@example.com"}, headers=headers)
    assert res.status_code == 409
    assert res.json() == {"detail": "Admin with this email already exist"}


def test_create_admin_rejects_bad_email(client, elnursery_app, make_admin):
    headers = _admin_headers(elnursery_app, make_admin)
    res = client.post("/admin", json={"name": "X", "email": "not-an-email"}, headers=headers)
    assert res.status_code == 422


def test_list_users_by_class(client, elnursery_app, make_admin, make_user):
    headers = _admin_headers(elnursery_app, make_admin)
    make_user("a@example.com", class_category="Sunflowers")
    make_user("b@example.com", class_category="Tulips")

    res = client.get("/user", params={"classCategory": "Tulips"}, headers=headers)

    assert res.status_code == 200
    assert [u["email"] for u in res.json()] == ["b@example.com"]


def test_user_always_reads_own_record(client, elnursery_app, make_user):
    other, _ = make_user("other@example.com")
    me, headers = _user_headers(elnursery_app, make_user, email="me@example.com")

    res = client.get(f"/user/{other.id}", headers=headers)

    assert res.status_code == 200
    assert res.json()["id"] == me.id


def test_user_updates_own_profile(client, elnursery_app, make_user):
    _, headers = _user_headers(elnursery_app, make_user)
    res = client.patch("/user/profile", json={"avatar": "https://cdn.example.com/me.png"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["avatar"] == "https://cdn.example.com/me.png"


def test_child_flow(client, elnursery_app, make_admin, make_user):
    parent, user_headers = _user_headers(elnursery_app, make_user)

    res = client.post("/child", json={"name": "Ada", "date_of_birth": "01/15/2021"}, headers=user_headers)
    assert res.status_code == 201, res.text
    child = res.json()
    assert child["parent_id"] == parent.id
    assert child["age"].endswith("months")

    over = client.post("/child", json={"name": "Bo", "date_of_birth": "03/02/2022"}, headers=user_headers)
    assert over.status_code == 400
    assert over.json() == {"detail": "Maximum number of children reached"}

    mine = client.get("/child/parent/anything", headers=user_headers)
    assert [c["id"] for c in mine.json()] == [child["id"]]

    admin_headers = _admin_headers(elnursery_app, make_admin)
    added = client.post(f"/child/{child['id']}/programs/prog-1", headers=admin_headers)
    assert added.json()["program_list"] == ["prog-1"]

    deleted = client.delete(f"/child/{child['id']}", headers=admin_headers)
    assert deleted.json() == {"message": "Child record deleted successfully"}
    assert client.get(f"/child/{child['id']}", headers=admin_headers).status_code == 404


def test_child_rejects_invalid_date(client, elnursery_app, make_user):
    _, headers = _user_headers(elnursery_app, make_user)
    res = client.post("/child", json={"name": "Ada", "date_of_birth": "someday"}, headers=headers)
    assert res.status_code == 422


def test_task_routes(client, elnursery_app, make_admin, make_user):
    headers = _admin_headers(elnursery_app, make_admin)
    payload = {"title": "Stack Blocks", "category": "Motor", "data": "https://cdn.example.com/b.mp4", "level": 1}

    created = client.post("/tasks", json=payload, headers=headers)
    assert created.status_code == 201
    task_id = created.json()["id"]

    assert client.post("/tasks", json=payload, headers=headers).status_code == 409
    assert len(client.get("/tasks", params={"category": "motor"}, headers=headers).json()) == 1

    _, user_headers = _user_headers(elnursery_app, make_user)
    assert client.get(f"/tasks/{task_id}", headers=user_headers).status_code == 200
    assert client.get("/tasks", headers=user_headers).status_code == 403


def test_change_password_clears_cookie(client, make_user):
    user, password = make_user()
    client.post("/auth/login/user", json={"email": user.email, "password": password})

    res = client.post(
        "/password/change",
        json={"old_password": password, "new_password": VALID_PASSWORD, "confirm_password": VALID_PASSWORD},
    )

    assert res.status_code == 200, res.text
    assert res.json() == {"message": "Password changed successfully"}
    assert "token=" in res.headers["set-cookie"]


def test_new_password_rules(client, elnursery_app, make_user):
    user, password = make_user()
    headers = auth_headers(elnursery_app, PrincipalType.USER, user.email, password)

    weak = client.post(
        "/password/change",
        json={"old_password": password, "new_password": "short", "confirm_password": "short"},
        headers=headers,
    )
    mismatch = client.post(
        "/password/change",
        json={"old_password": password, "new_password": VALID_PASSWORD, "confirm_password": "Other!9pw"},
        headers=headers,
    )

    assert weak.status_code == 422
    assert mismatch.status_code == 422


def test_reset_and_change_by_code(client, make_user, email_service):
    user, _ = make_user()

    res = client.post("/password/reset/user", json={"email": user.email})
    assert res.status_code == 200
    code = email_service.send_reset_code.call_args.args[2]

    bad = client.post(
        "/password/change/user",
        params={"email": user.email},
        json={"code": 1, "new_password": VALID_PASSWORD, "confirm_password": VALID_PASSWORD},
    )
    assert bad.status_code == 400
    assert bad.json() == {"detail": "Code is incorrect or expired"}

    ok = client.post(
        "/password/change/user",
        params={"email": user.email},
        json={"code": code, "new_password": VALID_PASSWORD, "confirm_password": VALID_PASSWORD},
    )
    assert ok.status_code == 200
    login = client.post("/auth/login/user", json={"email": user.email, "password": VALID_PASSWORD})
    assert login.status_code == 200


def test_uninitialized_app_reports_error(elnursery_app):
    from elnursery_web import deps

    app = create_app(elnursery_app)
    deps.set_app_instance(None)
    try:
        res = TestClient(app).get("/health")
    finally:
        deps.set_app_instance(elnursery_app)
    assert res.status_code == 500
