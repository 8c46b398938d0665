def register(client, username="alice", email=None, password="secret123", **extra):
    body = {"username": username, "email": email or f"{username}@example.com", "password": password}
    body.update(extra)
    return client.post("/api/users/register", json=body)


def login(client, username="alice", password="secret123"):
    return client.post("/api/users/login", json={"username": username, "password": password})


def create_feedback(client, headers, **fields):
    body = {"content": "Search is slow on mobile", "title": "Slow search"}
    body.update(fields)
    r = client.post("/api/feedback", json=body, headers=headers)
    assert r.status_code == 201, r.data
    return r.get_json()["data"]
