from flask import Blueprint, request
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from blogapp.errors import InvalidCredentials, ValidationError
from blogapp.middleware.auth import protect
from blogapp.services import auth_service
from blogapp.utils.request_data import json_body, text_value, raw_text
from blogapp.utils.response import success, error


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()

    email = text_value(data.get("email")).lower()
    password = raw_text(data.get("password"))

    if not email or not password:
        return error("Please provide email and password", 400)

    try:
        token, user = auth_service.login(email, password)
    except InvalidCredentials as e:
        return error(e.message, 401)

    resp, status = success("Login successful", token=token, user=user.to_dict())
    set_access_cookies(resp, token)
    return resp, status


@auth_bp.route("/logout", methods=["POST"])
@protect
def logout():
    # Token stateless: server hanya hapus cookie, token lama tetap valid sampai expired
    resp, status = success("Logged out successfully")
    unset_jwt_cookies(resp)
    return resp, status


@auth_bp.route("/me", methods=["GET"])
@protect
def get_me():
    return success(user=request.current_user.to_dict())


@auth_bp.route("/profile", methods=["PUT"])
@protect
def update_profile():
    data = json_body()
    if not data:
        return error("No data provided", 400)

    try:
        user = auth_service.update_profile(request.current_user, data)
    except ValidationError as e:
        return error(e.message, 400)

    return success("Profile updated successfully", user=user.to_dict())
