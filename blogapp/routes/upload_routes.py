import os
import uuid

from flask import Blueprint, request, current_app, send_from_directory
from werkzeug.utils import secure_filename

from blogapp.middleware.auth import protect
from blogapp.utils.response import success, error

upload_bp = Blueprint("upload", __name__)


@upload_bp.route("/api/upload", methods=["POST"])
@protect
def upload_image():
    file = request.files.get("image")
    if not file or not file.filename:
        return error("No file uploaded", 400)

    # Nama unik: <uuid>_<nama asli yang sudah diamankan>
    filename = secure_filename(file.filename) or "file"
    unique_filename = f"{uuid.uuid4().hex}_{filename}"

    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok=True)
    file.save(os.path.join(upload_folder, unique_filename))

    return success("File uploaded successfully", fileUrl=f"/uploads/{unique_filename}")


@upload_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
