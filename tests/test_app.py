import pytest

from config import TestingConfig
from blogapp import create_app
from blogapp.commands import DEFAULT_CATEGORIES, create_admin, seed_categories
from blogapp.extensions import db
from blogapp.models.category import Category
from blogapp.models.user import User
from tests.conftest import StubContentGenerator, count_rows


def _add_crashing_route(app):
    def crash():
        raise RuntimeError("kaboom")

    app.add_url_rule("/api/crash", "crash", crash)


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "message": "Server is running"}


def test_unknown_route(client):
    resp = client.get("/api/does-not-exist")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Route not found"}


def test_unexpected_error_includes_stack_outside_production(app):
    _add_crashing_route(app)

    resp = app.test_client().get("/api/crash")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"] == "kaboom"
    assert "RuntimeError" in body["stack"]


def test_unexpected_error_hidden_in_production(tmp_path):
    class ProductionConfig(TestingConfig):
        APP_ENV = "production"
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(ProductionConfig, content_generator=StubContentGenerator())
    _add_crashing_route(app)

    resp = app.test_client().get("/api/crash")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal Server Error"}


def test_cors_allows_configured_origin(client):
    resp = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"


def test_create_admin_is_idempotent(app):
    with app.app_context():
        user, created = create_admin("Root@Example.com", "admin123")
        again, created_again = create_admin("root@example.com", "other")

        assert created is True
        assert created_again is False
        assert again.id == user.id
        assert user.is_admin
        assert user.check_password("admin123")


def test_seed_categories_replaces_existing(app):
    with app.app_context():
        db.session.add(Category(name="Old", slug="old"))
        db.session.commit()

        assert seed_categories() == len(DEFAULT_CATEGORIES)
        assert sorted(c.slug for c in Category.query.all()) == [
            "business", "design", "lifestyle", "programming", "technology", "travel",
        ]


@pytest.mark.parametrize("args,expected", [
    (["create-admin", "--email", "boss@example.com", "--password", "rahasia1"], "Admin user created"),
    (["seed-categories"], "Created 6 categories"),
])
def test_cli_commands(app, args, expected):
    result = app.test_cli_runner().invoke(args=args)

    assert result.exit_code == 0, result.output
    assert expected in result.output


def test_cli_create_admin_twice(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["create-admin"])

    result = runner.invoke(args=["create-admin"])

    assert "already exists" in result.output
    assert count_rows(app, User, email="admin@example.com") == 1
