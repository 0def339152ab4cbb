import logging

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from blogapp.extensions import db
from blogapp.errors import InvalidCredentials, Unauthorized, ValidationError
from blogapp.models.user import User
from blogapp.utils.request_data import text_value

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def issue_token(user: User) -> str:
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def login(email: str, password: str) -> tuple[str, User]:
    """Cek kredensial; error yang sama untuk semua jenis kegagalan."""
    email = (email or "").strip().lower()
    user = User.query.filter_by(email=email).first()

    if not user or not user.is_active or not user.check_password(password or ""):
        logger.info("Failed login attempt for %s", email)
        raise InvalidCredentials()

    return issue_token(user), user


def user_from_claims(claims: dict) -> User:
    """Load user dari storage setiap request, jadi perubahan role/status langsung berlaku."""
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Not authorized, token invalid")

    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        raise Unauthorized("Not authorized, user not found or inactive")
    return user


def get_current_user(token: str | None) -> User:
    """Resolve user dari token mentah (di luar request, mis. job atau shell).

    Route HTTP lewat `middleware.auth.protect`, yang mengambil token dari
    header/cookie (plus cek CSRF cookie) lalu memakai `user_from_claims` yang sama.
    """
    if not token:
        raise Unauthorized("Not authorized, no token")
    try:
        claims = decode_token(token)
    except (JWTExtendedException, PyJWTError) as e:
        logger.debug("Token rejected: %s", e)
        raise Unauthorized("Not authorized, token failed")
    return user_from_claims(claims)


def update_profile(user: User, fields: dict) -> User:
    """Update profil milik user yang sedang login saja (name, password, avatar, bio)."""
    name = fields.get("name")
    if name is not None:
        name = text_value(name)
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(f"Name must be at least {MIN_NAME_LENGTH} characters")
        user.name = name

    password = fields.get("password")
    if password is not None and not isinstance(password, str):
        raise ValidationError("Password must be a string")
    if password:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        user.set_password(password)

    if "avatar" in fields:
        user.avatar = text_value(fields.get("avatar")) or None
    if "bio" in fields:
        user.bio = text_value(fields.get("bio")) or None

    db.session.commit()
    return user
