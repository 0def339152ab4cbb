"""Ownership checks, dievaluasi di controller setelah resource di-load.

Gate role ada di `blogapp.middleware.auth`; di sini hanya keputusan yang
butuh data pemilik resource.
"""


def is_owner(user, blog) -> bool:
    return blog.author_id is not None and blog.author_id == user.id


def can_modify_blog(user, blog) -> bool:
    """Penulis blog atau admin."""
    if user is None:
        return False
    return user.is_admin or is_owner(user, blog)
