class ApiError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request data"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Not authorized, please log in"


class InvalidCredentials(Unauthorized):
    # Satu pesan untuk email tidak dikenal, user nonaktif, dan password salah
    default_message = "Invalid credentials"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You do not have permission to perform this action"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class AIUnavailable(ApiError):
    status_code = 500
    default_message = (
        "AI feature temporarily unavailable. "
        "Please try again later or create the blog manually."
    )


class InternalError(ApiError):
    status_code = 500
