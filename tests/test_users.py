from msfeedback.extensions import db
from msfeedback.models.user import User
from tests.helpers import login, register


def test_register_returns_sanitized_user(client):
    r = register(client, firstName="Alice", phoneNumber="555-0100")
    assert r.status_code == 201, r.data
    data = r.get_json()["data"]
    assert data["username"] == "alice"
    assert data["firstName"] == "Alice"
    assert data["status"] == "active"
    assert "password" not in data


def test_register_duplicate_username(client):
    register(client)
    r = register(client, email="other@example.com")
    assert r.status_code == 400
    body = r.get_json()
    assert body["code"] == "USER_EXISTS"
    assert "already exists" in body["message"]


def test_register_validation_lists_every_field(client):
    r = client.post("/api/users/register", json={"username": "ab", "email": "nope", "password": "1"})
    assert r.status_code == 400
    body = r.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["errors"]}
    assert {"username", "email", "password"} <= fields


def test_login_and_me(client):
    register(client)
    r = login(client)
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["user"]["username"] == "alice"
    assert data["token"] and data["refreshToken"]

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.get_json()["data"]["email"] == "alice@example.com"


def test_login_with_email(client):
    register(client)
    r = login(client, username="alice@example.com")
    assert r.status_code == 200


def test_login_wrong_password(client):
    register(client)
    r = login(client, password="wrong-password")
    assert r.status_code == 401
    assert r.get_json()["code"] == "INVALID_CREDENTIALS"


def test_locked_account_cannot_login(client, app):
    register(client)
    with app.app_context():
        user = User.query.filter_by(username="alice").first()
        user.status = "locked"
        db.session.commit()
    r = login(client)
    assert r.status_code == 403
    assert r.get_json()["code"] == "ACCOUNT_DISABLED"


def test_change_password(client, auth_headers):
    r = client.put("/api/users/me/password", headers=auth_headers,
                   json={"oldPassword": "bad-password", "newPassword": "newsecret"})
    assert r.status_code == 400

    r = client.put("/api/users/me/password", headers=auth_headers,
                   json={"oldPassword": "secret123", "newPassword": "newsecret"})
    assert r.status_code == 200
    assert login(client, password="newsecret").status_code == 200


def test_list_update_and_delete_user(client, auth_headers):
    register(client, username="bob")
    r = client.get("/api/users?username=bo", headers=auth_headers)
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert [u["username"] for u in data["items"]] == ["bob"]
    assert data["pagination"]["total"] == 1
    bob_id = data["items"][0]["id"]

    r = client.put(f"/api/users/{bob_id}", headers=auth_headers, json={"lastName": "Builder", "status": "inactive"})
    assert r.status_code == 200
    assert r.get_json()["data"]["lastName"] == "Builder"
    assert r.get_json()["data"]["status"] == "inactive"

    r = client.put(f"/api/users/{bob_id}", headers=auth_headers, json={"email": "alice@example.com"})
    assert r.status_code == 409

    r = client.delete(f"/api/users/{bob_id}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/api/users/{bob_id}", headers=auth_headers).status_code == 404


def test_cannot_delete_self(client, auth_headers):
    me = client.get("/api/users/me", headers=auth_headers).get_json()["data"]
    r = client.delete(f"/api/users/{me['id']}", headers=auth_headers)
    assert r.status_code == 403


def test_user_list_rejects_unknown_sort_field(client, auth_headers):
    r = client.get("/api/users?sortBy=password", headers=auth_headers)
    assert r.status_code == 400
    assert r.get_json()["errors"][0]["field"] == "sortBy"
