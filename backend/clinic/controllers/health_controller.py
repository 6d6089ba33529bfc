"""
Health controller - health check endpoint for monitoring.
"""

import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from clinic.core.api_utils import api_response, request_db

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"])
def health_check():
    """
    Liveness plus a database round trip.

    Status codes:
        200: database reachable
        503: database unreachable
    """
    try:
        request_db().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(
            "Health check: database unreachable",
            extra={"context": {"error": type(e).__name__}},
        )
        return api_response(
            False,
            "Database unreachable",
            data={"status": "unhealthy", "database": "down"},
            status_code=503,
        )
    return api_response(
        True, "Service healthy", data={"status": "healthy", "database": "up"}
    )
