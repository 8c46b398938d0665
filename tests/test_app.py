from tests.helpers import login, register


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["status"] == "OK"
    assert "timestamp" in data
    assert data["uptime"] >= 0


def test_api_index(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert r.get_json()["endpoints"]["feedback"] == "/api/feedback"


def test_unknown_path_echoes_path(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    body = r.get_json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"
    assert "/api/does-not-exist" in body["message"]


def test_method_not_allowed_uses_envelope(client):
    r = client.delete("/api/users/register")
    assert r.status_code == 405
    assert r.get_json()["code"] == "METHOD_NOT_ALLOWED"


def test_protected_route_requires_token(client):
    r = client.get("/api/users/me")
    assert r.status_code == 401
    assert r.get_json()["code"] == "UNAUTHORIZED"


def test_invalid_token_rejected(client):
    r = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.get_json()["code"] == "INVALID_TOKEN"


def test_refresh_token_is_not_an_access_token(client):
    register(client)
    refresh = login(client).get_json()["data"]["refreshToken"]
    r = client.get("/api/users/me", headers={"Authorization": f"Bearer {refresh}"})
    assert r.status_code == 401


def test_token_of_deleted_user_does_not_carry_over_to_reused_id(client, auth_headers):
    register(client, username="bob")
    bob_token = login(client, username="bob").get_json()["data"]["token"]
    bob_id = client.get("/api/users/me", headers={"Authorization": f"Bearer {bob_token}"}).get_json()["data"]["id"]

    assert client.delete(f"/api/users/{bob_id}", headers=auth_headers).status_code == 200
    carol = register(client, username="carol").get_json()["data"]

    r = client.get("/api/users/me", headers={"Authorization": f"Bearer {bob_token}"})
    assert r.status_code == 401, (carol["id"], bob_id)
    assert r.get_json()["code"] == "INVALID_TOKEN"
