"""
Error kinds shared by services and the HTTP layer.

Services raise these; ``register_error_handlers`` turns them into the
``{"error": {"code", "message"}}`` envelope with the matching status code.
"""

from typing import Any, Dict, Optional
from flask import current_app
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError

from fitto.extensions import db
from fitto.utils.http import error


class FittoError(Exception):
    code = "UNKNOWN_ERROR"
    status = 500

    def __init__(self, message: str, code: Optional[str] = None, **extra: Any):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.extra: Dict[str, Any] = extra


class ValidationError(FittoError):
    code = "VALIDATION_ERROR"
    status = 400


class AuthError(FittoError):
    code = "UNAUTHORIZED"
    status = 401


class ForbiddenError(FittoError):
    code = "FORBIDDEN"
    status = 403


class NotFoundError(FittoError):
    code = "NOT_FOUND"
    status = 404


class ConflictError(FittoError):
    code = "CONFLICT"
    status = 409


class UpstreamError(FittoError):
    code = "UPSTREAM_ERROR"
    status = 502


class PersistenceError(FittoError):
    code = "PERSISTENCE_ERROR"
    status = 500


def register_error_handlers(app):

    @app.errorhandler(FittoError)
    def handle_fitto_error(e: FittoError):
        if e.status >= 500:
            current_app.logger.error(f"{e.code}: {e.message}")
        return error(e.code, e.message, e.status, **e.extra)

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(e: SchemaValidationError):
        return error("VALIDATION_ERROR", "Invalid request body", 400, fields=e.messages)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e: SQLAlchemyError):
        db.session.rollback()
        current_app.logger.error(f"Database error: {str(e)}")
        return error("PERSISTENCE_ERROR", "Storage unavailable", 500)

    @app.errorhandler(404)
    def handle_not_found(e):
        return error("NOT_FOUND", "Resource not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return error("METHOD_NOT_ALLOWED", "Method not allowed", 405)

    @app.errorhandler(500)
    def handle_unexpected(e):
        current_app.logger.exception("Unhandled error")
        return error("UNKNOWN_ERROR", "Server error", 500)
