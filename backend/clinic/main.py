import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_login import LoginManager

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from clinic.core.api_utils import api_response, close_request_db  # noqa: E402
from clinic.core.auth_decorators import load_identity_from_request  # noqa: E402
from clinic.core.config import (  # noqa: E402
    get_database_url,
    get_log_settings,
    is_production,
    is_testing,
    log_timezone_config,
)
from clinic.core.exceptions import ClinicError  # noqa: E402
from clinic.schemas.dtos import ErrorResponse  # noqa: E402

logger = logging.getLogger(__name__)


def _mask_url_password(url: str) -> str:
    import re

    return re.sub(r"(://[^:/?#]+):[^@]*@", r"\1:***@", url)


def create_app():
    app = Flask(__name__)

    if is_testing():
        app.config["TESTING"] = True

    # Configure structured logging (after app creation so we can register hooks)
    from clinic.core.logging_config import setup_logging

    setup_logging(app=app, **get_log_settings())
    logger.info(
        "Logging configured",
        extra={
            "context": {
                "environment": os.getenv("FLASK_ENV", "development"),
                "database_url": _mask_url_password(get_database_url()),
            }
        },
    )
    log_timezone_config()

    app.config["SECRET_KEY"] = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
    if is_production():
        secret_key = app.config["SECRET_KEY"]
        if secret_key == "dev-secret-change-me" or len(secret_key) < 32:
            raise ValueError(
                "Production deployment requires strong SECRET_KEY (min 32 chars). "
                "Set FLASK_SECRET_KEY environment variable."
            )

    # Sessions are owned by the identity provider; every request carries a token
    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.request_loader(load_identity_from_request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return api_response(
            False,
            "Authentication required",
            status_code=401,
            error="unauthorized",
        )

    @app.errorhandler(ClinicError)
    def handle_clinic_error(exc: ClinicError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request rejected",
            extra={
                "context": {
                    "error": exc.error_code,
                    "status": exc.status_code,
                    "error_message": exc.message,
                }
            },
        )
        error = ErrorResponse.from_exception(exc)
        return api_response(
            False,
            error.message,
            data=error.details,
            status_code=exc.status_code,
            error=error.error,
        )

    @app.errorhandler(500)
    def handle_server_error(exc):
        logger.error(
            "Unhandled server error",
            extra={"context": {"error": str(exc)}},
            exc_info=True,
        )
        error = ErrorResponse.server_error()
        return api_response(False, error.message, status_code=500, error=error.error)

    app.teardown_appcontext(close_request_db)

    from clinic.controllers import (
        appointment_bp,
        dashboard_bp,
        directory_bp,
        health_bp,
        patient_bp,
        visit_bp,
    )

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(directory_bp)
    app.register_blueprint(visit_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(health_bp)

    from clinic.db.session import create_tables

    create_tables()

    if os.getenv("SEED_DEMO_DATA", "").lower().strip() in ("true", "1", "yes"):
        from clinic.db.seed import ensure_demo_identities

        ensure_demo_identities()

    return app
