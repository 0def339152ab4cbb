from blogapp.models.category import Category
from tests.conftest import create_blog, make_category, count_rows


def test_list_sorted_by_name_with_active_filter(app, client):
    make_category(app, "Travel")
    make_category(app, "Food", is_active=False)
    make_category(app, "Business")

    everything = client.get("/api/categories").get_json()
    active = client.get("/api/categories?active=true").get_json()

    assert [c["name"] for c in everything["categories"]] == ["Business", "Food", "Travel"]
    assert everything["count"] == 3
    assert [c["name"] for c in active["categories"]] == ["Business", "Travel"]


def test_get_category(client, category_id):
    resp = client.get(f"/api/categories/{category_id}")

    category = resp.get_json()["category"]
    assert category["slug"] == "technology"
    assert category["color"] == "#3B82F6"
    assert category["isActive"] is True
    assert client.get("/api/categories/999").status_code == 404


def test_admin_creates_category_with_slug(client, admin):
    resp = client.post(
        "/api/categories",
        json={"name": "Health & Wellness", "icon": "🏥", "color": "#10B981"},
        headers=admin.headers,
    )

    assert resp.status_code == 201
    category = resp.get_json()["category"]
    assert category["slug"] == "health-wellness"
    assert category["icon"] == "🏥"


def test_create_validation(client, admin, category_id):
    assert client.post("/api/categories", json={}, headers=admin.headers).status_code == 400
    assert client.post("/api/categories", json={"name": "x" * 51}, headers=admin.headers).status_code == 400

    duplicate = client.post("/api/categories", json={"name": "Technology"}, headers=admin.headers)
    assert duplicate.status_code == 400
    assert duplicate.get_json()["message"] == "Category already exists"


def test_publisher_cannot_manage_categories(app, client, publisher, category_id):
    assert client.post("/api/categories", json={"name": "Sports"}, headers=publisher.headers).status_code == 403
    assert client.put(f"/api/categories/{category_id}", json={"name": "X"}, headers=publisher.headers).status_code == 403
    assert client.delete(f"/api/categories/{category_id}", headers=publisher.headers).status_code == 403
    assert client.post("/api/categories", json={"name": "Sports"}).status_code == 401
    assert count_rows(app, Category) == 1


def test_rename_rederives_slug(client, admin, category_id):
    resp = client.put(
        f"/api/categories/{category_id}",
        json={"name": "Tech News", "isActive": False},
        headers=admin.headers,
    )

    category = resp.get_json()["category"]
    assert category["slug"] == "tech-news"
    assert category["isActive"] is False


def test_rename_to_existing_name_rejected(app, client, admin, category_id):
    make_category(app, "Travel")

    resp = client.put(f"/api/categories/{category_id}", json={"name": "Travel"}, headers=admin.headers)

    assert resp.status_code == 400


def test_delete_refused_while_blogs_use_it(app, client, admin, publisher, category_id):
    create_blog(client, publisher.headers, category_id)

    resp = client.delete(f"/api/categories/{category_id}", headers=admin.headers)

    assert resp.status_code == 400
    assert "1 blog(s)" in resp.get_json()["message"]
    assert count_rows(app, Category) == 1


def test_delete_unused_category(app, client, admin):
    unused = make_category(app, "Empty")

    assert client.delete(f"/api/categories/{unused}", headers=admin.headers).status_code == 200
    assert client.delete(f"/api/categories/{unused}", headers=admin.headers).status_code == 404


def test_malformed_category_bodies(client, admin, category_id):
    assert client.post("/api/categories", json=["Sports"], headers=admin.headers).status_code == 400
    assert client.post("/api/categories", json={"name": {"en": "Sports"}}, headers=admin.headers).status_code == 400

    resp = client.put(f"/api/categories/{category_id}", json={"color": ["#fff"], "icon": 5}, headers=admin.headers)
    assert resp.status_code == 200
    assert resp.get_json()["category"]["color"] == "#3B82F6"
    assert resp.get_json()["category"]["icon"] == "5"
