import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default="0"):
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes"}


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-change-me')
    APP_ENV = os.environ.get('APP_ENV', 'development')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    # Path sqlite relatif disimpan di folder instance/
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///blog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Buat tabel saat startup kalau belum pakai `flask db upgrade`
    AUTO_CREATE_TABLES = _env_flag('AUTO_CREATE_TABLES', '1')

    # Upload
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # Batas max file 16MB

    # JWT: bearer header dulu, lalu cookie
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.environ.get('JWT_EXPIRES_DAYS', '7')))
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    # Cookie secure hanya TRUE di HTTPS production
    JWT_COOKIE_SECURE = _env_flag('JWT_COOKIE_SECURE')
    JWT_COOKIE_CSRF_PROTECT = _env_flag('JWT_COOKIE_CSRF_PROTECT', '1')

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://localhost:5000'
        ).split(',')
        if origin.strip()
    ]

    # === AI content generation (Gemini) ===
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-1.5-flash')
    GEMINI_API_URL = os.environ.get(
        'GEMINI_API_URL', 'https://generativelanguage.googleapis.com/v1beta'
    )
    AI_REQUEST_TIMEOUT = int(os.environ.get('AI_REQUEST_TIMEOUT', '60'))

    # Hapus komentar ikut saat blog dihapus (default: tidak, komentar jadi yatim)
    CASCADE_BLOG_COMMENTS = _env_flag('CASCADE_BLOG_COMMENTS')


class TestingConfig(Config):
    TESTING = True
    APP_ENV = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    AUTO_CREATE_TABLES = True
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    JWT_COOKIE_CSRF_PROTECT = False
    GEMINI_API_KEY = 'test-key'
    BCRYPT_LOG_ROUNDS = 4
