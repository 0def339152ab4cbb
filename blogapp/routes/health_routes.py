from flask import Blueprint

from blogapp.utils.response import success

health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.route("/health", methods=["GET"])
def health():
    return success("Server is running")
