from types import SimpleNamespace

import pytest

from config import TestingConfig
from blogapp import create_app
from blogapp.errors import AIUnavailable
from blogapp.extensions import db
from blogapp.models.category import Category
from blogapp.models.comment import Comment
from blogapp.models.user import User
from blogapp.services import auth_service
from blogapp.services.ai_service import ContentGenerator


class StubContentGenerator(ContentGenerator):
    """Balasan model diatur dari test; prompt dicatat."""

    def __init__(self):
        self.responses = []
        self.prompts = []
        self.fail = False

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise AIUnavailable()
        return self.responses.pop(0) if self.responses else ""


@pytest.fixture
def generator():
    return StubContentGenerator()


@pytest.fixture
def app(tmp_path, generator):
    class _Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(_Config, content_generator=generator)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, name, email, password="secret123", role="publisher", is_active=True):
    with app.app_context():
        user = User(name=name, email=email, role=role, is_active=is_active)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        token = auth_service.issue_token(user)
        return SimpleNamespace(
            id=user.id,
            name=name,
            email=email,
            password=password,
            token=token,
            headers={"Authorization": f"Bearer {token}"},
        )


@pytest.fixture
def admin(app):
    return make_user(app, "Admin", "admin@example.com", role="admin")


@pytest.fixture
def publisher(app):
    return make_user(app, "Penulis Satu", "writer@example.com")


@pytest.fixture
def other_publisher(app):
    return make_user(app, "Penulis Dua", "other@example.com")


def make_category(app, name="Technology", **fields):
    with app.app_context():
        from blogapp.utils.slug import slugify
        category = Category(name=name, slug=slugify(name), **fields)
        db.session.add(category)
        db.session.commit()
        return category.id


@pytest.fixture
def category_id(app):
    return make_category(app)


def create_blog(client, headers, category_id, **overrides):
    payload = {
        "title": "Getting Started with Flask",
        "description": "A gentle introduction",
        "content": "<p>Flask is a micro framework.</p>",
        "category": category_id,
    }
    payload.update(overrides)
    resp = client.post("/api/blogs", json=payload, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["blog"]


def make_comment(app, blog_id, approved=False, parent_id=None, name="Budi", content="Nice post"):
    with app.app_context():
        comment = Comment(
            blog_id=blog_id,
            name=name,
            email="budi@example.com",
            content=content,
            is_approved=approved,
            parent_id=parent_id,
        )
        db.session.add(comment)
        db.session.commit()
        return comment.id


def count_rows(app, model, **filters):
    with app.app_context():
        return model.query.filter_by(**filters).count()

