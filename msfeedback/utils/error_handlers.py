import traceback

from flask import current_app, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from msfeedback.extensions import db
from msfeedback.utils.errors import AppError, flatten_validation_messages
from msfeedback.utils.http import error

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMITED",
}


def app_error_response(exc: AppError):
    current_app.logger.warning("%s %s -> %s %s: %s", request.method, request.path, exc.status, exc.code, exc.message)
    return error(exc.code, exc.message, exc.status, errors=exc.errors)


def http_error_response(exc: HTTPException):
    if exc.code == 404:
        return error("NOT_FOUND", f"Path {request.path} not found", 404)
    return error(_HTTP_CODES.get(exc.code, "HTTP_ERROR"), exc.description or exc.name, exc.code)


def integrity_error_response(exc: IntegrityError):
    current_app.logger.warning("Integrity error on %s %s: %s", request.method, request.path, exc.orig)
    return error("CONFLICT", "Record already exists or violates a constraint", 409)


def internal_error_response(exc: Exception):
    """Generic 500; exception text and stack only outside production."""
    current_app.logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=exc)
    extra = {}
    if current_app.config.get("APP_ENV") != "production":
        extra["details"] = str(exc)
        extra["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error("INTERNAL_ERROR", "Internal server error", 500, **extra)


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(exc):
        db.session.rollback()
        return app_error_response(exc)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return error("VALIDATION_ERROR", "Validation failed", 400,
                     errors=flatten_validation_messages(exc.messages))

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(exc):
        db.session.rollback()
        return integrity_error_response(exc)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        return http_error_response(exc)

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        db.session.rollback()
        return internal_error_response(exc)
