from flask import Blueprint, request

from blogapp.extensions import db
from blogapp.middleware.auth import protect, authorize
from blogapp.models.blog import Blog
from blogapp.models.category import Category
from blogapp.models.user import ROLE_ADMIN
from blogapp.utils.request_data import json_body, text_value
from blogapp.utils.response import success, error
from blogapp.utils.slug import slugify

category_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


def _slug_taken(slug, exclude_id=None):
    query = Category.query.filter_by(slug=slug)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


# =========================
# PUBLIC
# =========================
@category_bp.route("", methods=["GET"])
def get_categories():
    query = Category.query
    if (request.args.get("active") or "").lower() == "true":
        query = query.filter_by(is_active=True)

    categories = query.order_by(Category.name.asc()).all()
    return success(count=len(categories), categories=[c.to_dict() for c in categories])


@category_bp.route("/<int:category_id>", methods=["GET"])
def get_category(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        return error("Category not found", 404)
    return success(category=category.to_dict())


# =========================
# ADMIN
# =========================
@category_bp.route("", methods=["POST"])
@protect
@authorize(ROLE_ADMIN)
def create_category():
    data = json_body()
    name = text_value(data.get("name"))

    if not name:
        return error("Please provide category name", 400)
    if len(name) > 50:
        return error("Category name cannot exceed 50 characters", 400)

    slug = slugify(name)
    if not slug:
        return error("Category name must contain letters or numbers", 400)
    if _slug_taken(slug) or Category.query.filter_by(name=name).first():
        return error("Category already exists", 400)

    category = Category(
        name=name,
        slug=slug,
        description=text_value(data.get("description")) or None,
        icon=text_value(data.get("icon")) or None,
        color=text_value(data.get("color")) or "#3B82F6",
        is_active=bool(data.get("isActive", True)),
    )
    db.session.add(category)
    db.session.commit()

    return success("Category created successfully", 201, category=category.to_dict())


@category_bp.route("/<int:category_id>", methods=["PUT"])
@protect
@authorize(ROLE_ADMIN)
def update_category(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        return error("Category not found", 404)

    data = json_body()

    name = data.get("name")
    if name is not None:
        name = text_value(name)
        if not name or len(name) > 50:
            return error("Category name must be 1-50 characters", 400)
        slug = slugify(name)
        if not slug:
            return error("Category name must contain letters or numbers", 400)
        if _slug_taken(slug, exclude_id=category.id):
            return error("Category already exists", 400)
        category.name = name
        category.slug = slug

    if "description" in data:
        category.description = text_value(data.get("description")) or None
    if "icon" in data:
        category.icon = text_value(data.get("icon")) or None
    color = text_value(data.get("color"))
    if color:
        category.color = color
    if "isActive" in data:
        category.is_active = bool(data["isActive"])

    db.session.commit()
    return success("Category updated successfully", category=category.to_dict())


@category_bp.route("/<int:category_id>", methods=["DELETE"])
@protect
@authorize(ROLE_ADMIN)
def delete_category(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        return error("Category not found", 404)

    in_use = Blog.query.filter_by(category_id=category.id).count()
    if in_use:
        return error(f"Cannot delete category: {in_use} blog(s) still use it", 400)

    db.session.delete(category)
    db.session.commit()
    return success("Category deleted successfully")
