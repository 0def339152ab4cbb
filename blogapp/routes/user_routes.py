import re

from flask import Blueprint, request

from blogapp.extensions import db
from blogapp.middleware.auth import protect, authorize
from blogapp.models.blog import Blog
from blogapp.models.user import User, ROLES, ROLE_ADMIN, ROLE_PUBLISHER
from blogapp.services.auth_service import MIN_PASSWORD_LENGTH, MIN_NAME_LENGTH
from blogapp.utils.request_data import json_body, text_value
from blogapp.utils.response import success, error

user_bp = Blueprint("users", __name__, url_prefix="/api/users")

EMAIL_REGEX = r"^[\w\.-]+@[\w\.-]+\.\w+$"
MAX_EMAIL_LENGTH = 120


def _validate_user_input(data: dict, partial: bool = False) -> list[str]:
    errors: list[str] = []

    name = data.get("name")
    email = data.get("email")
    password = data.get("password")
    role = data.get("role")

    if name is not None or not partial:
        name = text_value(name)
        if not name:
            errors.append("Name is required.")
        elif len(name) < MIN_NAME_LENGTH:
            errors.append(f"Name must be at least {MIN_NAME_LENGTH} characters.")
        elif len(name) > 100:
            errors.append("Name cannot exceed 100 characters.")

    if email is not None or not partial:
        email = text_value(email).lower()
        if not email:
            errors.append("Email is required.")
        elif len(email) > MAX_EMAIL_LENGTH or not re.match(EMAIL_REGEX, email):
            errors.append("Please provide a valid email.")

    if password is not None and not isinstance(password, str):
        errors.append("Password must be a string.")
    elif password or not partial:
        if not password:
            errors.append("Password is required.")
        elif len(password) < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    if role is not None and (not isinstance(role, str) or role not in ROLES):
        errors.append("Invalid role.")

    return errors


# Semua route user khusus admin
@user_bp.route("", methods=["GET"])
@protect
@authorize(ROLE_ADMIN)
def get_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return success(count=len(users), users=[u.to_dict() for u in users])


@user_bp.route("/publishers", methods=["GET"])
@protect
@authorize(ROLE_ADMIN)
def get_publishers():
    publishers = (
        User.query.filter_by(role=ROLE_PUBLISHER)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    return success(count=len(publishers), publishers=[u.to_dict() for u in publishers])


@user_bp.route("/<int:user_id>", methods=["GET"])
@protect
@authorize(ROLE_ADMIN)
def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return error("User not found", 404)
    return success(user=user.to_dict())


@user_bp.route("", methods=["POST"])
@protect
@authorize(ROLE_ADMIN)
def create_user():
    data = json_body()
    if not data:
        return error("No data provided", 400)

    validation_errors = _validate_user_input(data)
    if validation_errors:
        return error(validation_errors[0], 400)

    email = text_value(data["email"]).lower()
    if User.query.filter_by(email=email).first():
        return error("User with this email already exists", 400)

    user = User(
        name=text_value(data["name"]),
        email=email,
        role=data.get("role") or ROLE_PUBLISHER,
        is_active=bool(data.get("isActive", True)),
        bio=text_value(data.get("bio")) or None,
        avatar=text_value(data.get("avatar")) or None,
    )
    user.set_password(data["password"])

    db.session.add(user)
    db.session.commit()

    return success("User created successfully", 201, user=user.to_dict())


@user_bp.route("/<int:user_id>", methods=["PUT"])
@protect
@authorize(ROLE_ADMIN)
def update_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return error("User not found", 404)

    data = json_body()

    validation_errors = _validate_user_input(data, partial=True)
    if validation_errors:
        return error(validation_errors[0], 400)

    if data.get("email") is not None:
        email = text_value(data["email"]).lower()
        existing = User.query.filter_by(email=email).first()
        if existing and existing.id != user.id:
            return error("User with this email already exists", 400)
        user.email = email

    if data.get("name") is not None:
        user.name = text_value(data["name"])
    if data.get("role") is not None:
        user.role = data["role"]
    if "isActive" in data:
        user.is_active = bool(data["isActive"])
    if data.get("password"):
        user.set_password(data["password"])
    if "bio" in data:
        user.bio = text_value(data.get("bio")) or None
    if "avatar" in data:
        user.avatar = text_value(data.get("avatar")) or None

    db.session.commit()
    return success("User updated successfully", user=user.to_dict())


@user_bp.route("/<int:user_id>", methods=["DELETE"])
@protect
@authorize(ROLE_ADMIN)
def delete_user(user_id):
    if user_id == request.current_user.id:
        return error("You cannot delete your own account", 400)

    user = db.session.get(User, user_id)
    if not user:
        return error("User not found", 404)

    # Blog tetap ada; author_name jadi snapshot penulis
    Blog.query.filter_by(author_id=user.id).update(
        {Blog.author_id: None}, synchronize_session=False
    )
    db.session.delete(user)
    db.session.commit()

    return success("User deleted successfully")
