import logging
import traceback
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from store_admin.core.config import Config
from store_admin.core.dependencies import EXTENSION_KEY, DependencyContainer
from store_admin.core.exceptions import BaseAPIException
from store_admin.db import build_engine, build_session_factory
from store_admin.repositories.category_repository import CategoryRepository
from store_admin.repositories.statistics_repository import StatisticsRepository
from store_admin.routes.categories import categories_bp
from store_admin.routes.statistics import statistics_bp
from store_admin.services.category_service import CategoryService
from store_admin.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(status: int, code: str, message: str, details: Optional[dict] = None):
    return jsonify({
        "success": False,
        "error": {"code": code, "message": message, "details": details or {}},
        "timestamp": _timestamp(),
    }), status


def create_app(app_config: Optional[Config] = None) -> Flask:
    """
    Application factory.

    Tests pass their own Config (typically an in-memory SQLite URL); the
    server uses the one built from the environment.
    """
    if app_config is None:
        from store_admin.core.config import config as app_config
    app_config.validate()

    logging.basicConfig(
        level=app_config.app.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = app_config.app.debug

    # ------------------------------------------------------------------ #
    # CORS: one trusted dashboard origin, cookies allowed                 #
    # ------------------------------------------------------------------ #
    origins = [app_config.cors.client_url] if app_config.cors.client_url else []
    CORS(
        app,
        origins=origins,
        supports_credentials=app_config.cors.supports_credentials,
        expose_headers=app_config.cors.expose_headers,
    )

    # ------------------------------------------------------------------ #
    # Database and services                                               #
    # ------------------------------------------------------------------ #
    engine = build_engine(app_config.database)
    session_factory = build_session_factory(engine)

    container = DependencyContainer()
    container.register_factory(
        CategoryService,
        lambda: CategoryService(CategoryRepository(session_factory)),
    )
    container.register_factory(
        StatisticsService,
        lambda: StatisticsService(StatisticsRepository(session_factory), app_config.report),
    )
    app.extensions[EXTENSION_KEY] = container
    app.extensions["store_admin.engine"] = engine

    # ------------------------------------------------------------------ #
    # Blueprints: everything is scoped by store under /api/v1/stores      #
    # ------------------------------------------------------------------ #
    app.register_blueprint(categories_bp, url_prefix="/api/v1/stores")
    app.register_blueprint(statistics_bp, url_prefix="/api/v1/stores")

    # ------------------------------------------------------------------ #
    # Error handlers: consistent JSON error envelope                      #
    # ------------------------------------------------------------------ #
    @app.errorhandler(BaseAPIException)
    def api_error(e: BaseAPIException):
        if e.status_code >= 500:
            logger.error(f"{e.error_code}: {e.internal_message}")
        else:
            logger.info(f"{e.error_code}: {e.message}")
        body = e.to_dict()
        body["timestamp"] = _timestamp()
        return jsonify(body), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        code = (e.name or "error").upper().replace(" ", "_")
        return _error(e.code or 500, code, str(e.description))

    @app.errorhandler(SQLAlchemyError)
    def db_error(e):
        logger.error(f"Database error: {e}\n{traceback.format_exc()}")
        return _error(500, "DATABASE_ERROR", "A database error occurred.")

    @app.errorhandler(500)
    def internal_error(e):
        logger.error(f"Internal error: {e}\n{traceback.format_exc()}")
        return _error(500, "INTERNAL_ERROR", "An internal server error occurred.")

    # ------------------------------------------------------------------ #
    # Health check                                                         #
    # ------------------------------------------------------------------ #
    @app.get("/health")
    def health():
        """Liveness + readiness probe. Returns 503 if DB is unreachable."""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return jsonify({
                "status": "ok",
                "database": "reachable",
                "timestamp": _timestamp(),
            }), 200
        except SQLAlchemyError as exc:
            logger.error(f"Health check failed: {exc}")
            return jsonify({"status": "error", "database": str(exc)}), 503

    logger.info(f"Application created ({app_config.environment})")
    return app


def main() -> None:
    from store_admin.core.config import config

    application = create_app(config)
    application.run(debug=config.app.debug, host=config.app.host, port=config.app.port)


if __name__ == "__main__":
    main()
