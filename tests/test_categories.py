from msfeedback.extensions import db
from msfeedback.models.category import Category
from tests.helpers import create_feedback


def _create(client, headers, **body):
    r = client.post("/api/categories", json=body, headers=headers)
    assert r.status_code == 201, r.data
    return r.get_json()["data"]


def test_create_and_get_category(client, auth_headers):
    parent = _create(client, auth_headers, name="Bugs", color="#ff4d4f")
    child = _create(client, auth_headers, name="Crashes", parentId=parent["id"])
    assert child["parentId"] == parent["id"]
    assert child["color"] == "#1890ff"

    r = client.get(f"/api/categories/{parent['id']}")
    data = r.get_json()["data"]
    assert data["_count"] == {"children": 1, "feedbacks": 0}
    assert [c["name"] for c in data["children"]] == ["Crashes"]
    assert data["parent"] is None


def test_create_category_requires_session(client):
    assert client.post("/api/categories", json={"name": "x"}).status_code == 401


def test_create_category_validates_color(client, auth_headers):
    r = client.post("/api/categories", json={"name": "x", "color": "red"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.get_json()["errors"][0]["field"] == "color"


def test_tree_is_nested_and_active_only(client, auth_headers):
    root_b = _create(client, auth_headers, name="Beta", sortOrder=2)
    root_a = _create(client, auth_headers, name="Alpha", sortOrder=1)
    child = _create(client, auth_headers, name="Child", parentId=root_a["id"])
    _create(client, auth_headers, name="Grandchild", parentId=child["id"])
    _create(client, auth_headers, name="Hidden", parentId=root_a["id"], isActive=False)

    tree = client.get("/api/categories/tree").get_json()["data"]
    assert [n["name"] for n in tree] == ["Alpha", "Beta"]
    alpha = tree[0]
    assert [c["name"] for c in alpha["children"]] == ["Child"]
    assert [c["name"] for c in alpha["children"][0]["children"]] == ["Grandchild"]
    assert tree[1]["id"] == root_b["id"]
    assert tree[1]["children"] == []


def test_list_root_categories(client, auth_headers):
    root = _create(client, auth_headers, name="Root")
    _create(client, auth_headers, name="Leaf", parentId=root["id"])
    data = client.get("/api/categories?parentId=null").get_json()["data"]
    assert [c["name"] for c in data["items"]] == ["Root"]
    assert client.get("/api/categories?parentId=abc").status_code == 400


def test_delete_blocked_by_children(client, auth_headers, app):
    parent = _create(client, auth_headers, name="Parent")
    _create(client, auth_headers, name="Child", parentId=parent["id"])

    r = client.delete(f"/api/categories/{parent['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert r.get_json()["code"] == "CATEGORY_HAS_CHILDREN"
    with app.app_context():
        assert Category.query.count() == 2


def test_delete_blocked_by_feedback(client, auth_headers, app):
    category = _create(client, auth_headers, name="Linked")
    create_feedback(client, auth_headers, categoryId=category["id"])

    r = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert r.get_json()["code"] == "CATEGORY_HAS_FEEDBACK"
    with app.app_context():
        assert db.session.get(Category, category["id"]) is not None


def test_delete_leaf_category(client, auth_headers):
    category = _create(client, auth_headers, name="Leaf")
    assert client.delete(f"/api/categories/{category['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/categories/{category['id']}").status_code == 404


def test_update_rejects_cycle(client, auth_headers):
    a = _create(client, auth_headers, name="A")
    b = _create(client, auth_headers, name="B", parentId=a["id"])

    r = client.put(f"/api/categories/{a['id']}", json={"parentId": b["id"]}, headers=auth_headers)
    assert r.status_code == 400
    r = client.put(f"/api/categories/{a['id']}", json={"parentId": a["id"]}, headers=auth_headers)
    assert r.status_code == 400

    r = client.put(f"/api/categories/{b['id']}", json={"parentId": None, "name": "B2"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.get_json()["data"]["parentId"] is None
    assert r.get_json()["data"]["name"] == "B2"


def test_name_filter_treats_underscore_literally(client, auth_headers):
    _create(client, auth_headers, name="UI")
    _create(client, auth_headers, name="Bug_report")
    data = client.get("/api/categories?name=_").get_json()["data"]
    assert [c["name"] for c in data["items"]] == ["Bug_report"]
