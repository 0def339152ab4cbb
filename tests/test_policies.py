from types import SimpleNamespace

from blogapp.policies import can_modify_blog, is_owner


ADMIN = SimpleNamespace(id=1, is_admin=True)
AUTHOR = SimpleNamespace(id=2, is_admin=False)
STRANGER = SimpleNamespace(id=3, is_admin=False)


def _blog(author_id):
    return SimpleNamespace(author_id=author_id)


def test_author_and_admin_can_modify():
    blog = _blog(AUTHOR.id)

    assert can_modify_blog(AUTHOR, blog)
    assert can_modify_blog(ADMIN, blog)
    assert not can_modify_blog(STRANGER, blog)
    assert not can_modify_blog(None, blog)


def test_blog_without_author_is_admin_only():
    blog = _blog(None)

    assert not is_owner(AUTHOR, blog)
    assert not can_modify_blog(AUTHOR, blog)
    assert can_modify_blog(ADMIN, blog)
