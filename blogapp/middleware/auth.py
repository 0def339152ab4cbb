from functools import wraps
from flask import request
from flask_jwt_extended import verify_jwt_in_request, get_jwt
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from blogapp.errors import Unauthorized
from blogapp.services import auth_service
from blogapp.utils.response import error


def protect(f):
    """Wajib login: token dari header Bearer atau cookie."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            verify_jwt_in_request()
            user = auth_service.user_from_claims(get_jwt())
        except (JWTExtendedException, PyJWTError):
            return error("Not authorized, token failed", 401)
        except Unauthorized as e:
            return error(e.message, 401)

        request.current_user = user
        return f(*args, **kwargs)
    return wrapper


def authorize(*roles):
    """Dipakai setelah @protect."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            user = getattr(request, "current_user", None)
            if user is None:
                return error("Not authorized, please log in", 401)
            if user.role not in roles:
                return error(f"User role '{user.role}' is not authorized to access this route", 403)
            return f(*args, **kwargs)
        return wrapper
    return decorator
