import pytest

from blogapp.extensions import db
from blogapp.models.blog import Blog
from blogapp.models.user import User
from tests.conftest import create_blog, count_rows


def _new_user(**overrides):
    data = {"name": "Penulis Baru", "email": "baru@example.com", "password": "rahasia1"}
    data.update(overrides)
    return data


def test_admin_creates_publisher_by_default(client, admin):
    resp = client.post("/api/users", json=_new_user(email="Baru@Example.com"), headers=admin.headers)

    assert resp.status_code == 201
    user = resp.get_json()["user"]
    assert user["role"] == "publisher"
    assert user["email"] == "baru@example.com"
    assert user["isActive"] is True
    assert "password_hash" not in user

    login = client.post("/api/auth/login", json={"email": "baru@example.com", "password": "rahasia1"})
    assert login.status_code == 200


@pytest.mark.parametrize("payload", [
    _new_user(name="A"),
    _new_user(email="bukan-email"),
    _new_user(password="123"),
    _new_user(role="editor"),
    {"name": "Tanpa Email", "password": "rahasia1"},
])
def test_create_validation(client, admin, payload):
    resp = client.post("/api/users", json=payload, headers=admin.headers)
    assert resp.status_code == 400


def test_duplicate_email_rejected(client, admin, publisher):
    resp = client.post("/api/users", json=_new_user(email=publisher.email), headers=admin.headers)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "User with this email already exists"


def test_list_users_and_publishers(client, admin, publisher, other_publisher):
    users = client.get("/api/users", headers=admin.headers).get_json()
    publishers = client.get("/api/users/publishers", headers=admin.headers).get_json()

    assert users["count"] == 3
    assert publishers["count"] == 2
    assert {u["email"] for u in publishers["publishers"]} == {publisher.email, other_publisher.email}


def test_get_user(client, admin, publisher):
    assert client.get(f"/api/users/{publisher.id}", headers=admin.headers).get_json()["user"]["name"] == publisher.name
    assert client.get("/api/users/999", headers=admin.headers).status_code == 404


def test_update_is_partial(app, client, admin, publisher):
    resp = client.put(
        f"/api/users/{publisher.id}",
        json={"role": "admin", "isActive": False},
        headers=admin.headers,
    )

    user = resp.get_json()["user"]
    assert user["role"] == "admin"
    assert user["isActive"] is False
    assert user["name"] == publisher.name
    assert user["email"] == publisher.email

    # Password lama masih berlaku karena tidak dikirim
    with app.app_context():
        assert db.session.get(User, publisher.id).check_password(publisher.password)


def test_update_to_taken_email_rejected(client, admin, publisher, other_publisher):
    resp = client.put(
        f"/api/users/{publisher.id}",
        json={"email": other_publisher.email},
        headers=admin.headers,
    )
    assert resp.status_code == 400


def test_delete_user_keeps_blogs_with_author_name(app, client, admin, publisher, category_id):
    blog = create_blog(client, publisher.headers, category_id)

    resp = client.delete(f"/api/users/{publisher.id}", headers=admin.headers)

    assert resp.status_code == 200
    assert count_rows(app, User, id=publisher.id) == 0
    with app.app_context():
        kept = db.session.get(Blog, blog["id"])
        assert kept.author_id is None
        assert kept.author_name == publisher.name

    detail = client.get(f"/api/blogs/{blog['id']}").get_json()["blog"]
    assert detail["author"] is None
    assert detail["authorName"] == publisher.name

    # Token milik user yang dihapus tidak lagi berlaku
    assert client.get("/api/auth/me", headers=publisher.headers).status_code == 401


def test_admin_cannot_delete_self(client, admin):
    resp = client.delete(f"/api/users/{admin.id}", headers=admin.headers)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "You cannot delete your own account"


def test_user_routes_are_admin_only(client, publisher):
    assert client.get("/api/users").status_code == 401
    resp = client.get("/api/users", headers=publisher.headers)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "User role 'publisher' is not authorized to access this route"


@pytest.mark.parametrize("payload", [
    _new_user(role=["admin"]),
    _new_user(password=12345678),
    _new_user(email="a" * 120 + "@example.com"),
    _new_user(name={"first": "Penulis"}),
])
def test_create_rejects_malformed_values(client, admin, payload):
    resp = client.post("/api/users", json=payload, headers=admin.headers)

    assert resp.status_code == 400


def test_create_with_array_body(client, admin):
    assert client.post("/api/users", json=[_new_user()], headers=admin.headers).status_code == 400
