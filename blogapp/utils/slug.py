import re

def slugify(text: str) -> str:
    """'Hello  World!' -> 'hello-world'"""
    text = (text or "").strip().lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def unique_slug(model, text: str, exclude_id=None) -> str:
    """Slug unik untuk tabel `model`; tambah -2, -3, ... kalau sudah dipakai."""
    base = slugify(text) or "untitled"
    candidate = base
    counter = 2
    while True:
        query = model.query.filter_by(slug=candidate)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if not query.first():
            return candidate
        candidate = f"{base}-{counter}"
        counter += 1
