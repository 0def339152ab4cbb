import logging
import os
import threading
import traceback

from flask import Flask
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from blogapp.extensions import db, migrate, cors, jwt, bcrypt
from blogapp.errors import ApiError
from blogapp.utils.response import error


def create_app(config_class=Config, content_generator=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )
    jwt.init_app(app)
    bcrypt.init_app(app)

    os.makedirs(app.instance_path, exist_ok=True)
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    # ==== AI CONTENT GENERATOR (bisa diganti stub saat test) ====
    if content_generator is None:
        from blogapp.services.ai_service import GeminiContentGenerator
        content_generator = GeminiContentGenerator.from_config(app.config)
    app.extensions["content_generator"] = content_generator

    # Register models sebelum create_all / migrate
    from blogapp.models import user, category, blog, comment  # noqa: F401

    # Register blueprints
    from blogapp.routes.auth_routes import auth_bp
    from blogapp.routes.user_routes import user_bp
    from blogapp.routes.blog_routes import blog_bp
    from blogapp.routes.category_routes import category_bp
    from blogapp.routes.comment_routes import comment_bp
    from blogapp.routes.upload_routes import upload_bp
    from blogapp.routes.health_routes import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(comment_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(health_bp)

    _register_error_handlers(app)

    from blogapp.commands import register_commands
    register_commands(app)

    _check_database(app)

    return app


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)

    # Exception di thread lain cukup dicatat, proses tetap jalan
    def _log_thread_exception(args):
        app.logger.error(
            "Uncaught exception in thread %s",
            getattr(args.thread, "name", "?"),
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    threading.excepthook = _log_thread_exception


def _check_database(app):
    """Gagal konek DB saat startup hanya dicatat; request berikutnya akan gagal per-request."""
    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
            if app.config.get("AUTO_CREATE_TABLES"):
                db.create_all()
            app.logger.info("Database connected: %s", db.engine.url.render_as_string(hide_password=True))
        except SQLAlchemyError as e:
            app.logger.error("Database connection error: %s", e)
            app.logger.error("Server will continue running, but database operations will fail")
        finally:
            db.session.remove()


def _register_error_handlers(app):
    is_production = app.config.get("APP_ENV") == "production"

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        return error(e.message, e.status_code)

    @app.errorhandler(404)
    def handle_not_found(e):
        return error("Route not found", 404)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", e)

        payload = {}
        message = str(e) or "Internal Server Error"
        if is_production:
            message = "Internal Server Error"
        else:
            payload["stack"] = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        return error(message, 500, **payload)
