import time
from functools import wraps

from flask import current_app, g, make_response, request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from msfeedback.extensions import db
from msfeedback.services import external_service
from msfeedback.utils.error_handlers import (
    app_error_response,
    http_error_response,
    integrity_error_response,
    internal_error_response,
)
from msfeedback.utils.errors import AppError


def require_api_key(permission: str):
    """
    Authenticate a partner call by API key and check ``permission``.

    Every attempt, successful or not, appends exactly one ApiCallLog row with
    the final status code and the elapsed time.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            system_id = None
            try:
                key_record = external_service.lookup_api_key(external_service.extract_api_key(request.headers))
                system = key_record.external_system
                system_id = system.id
                external_service.ensure_enabled(system)
                external_service.authorize(system, permission)
                external_service.touch_key(key_record)
                g.external_system = system
                response = make_response(f(*args, **kwargs))
            except AppError as exc:
                db.session.rollback()
                response = make_response(app_error_response(exc))
            except IntegrityError as exc:
                db.session.rollback()
                response = make_response(integrity_error_response(exc))
            except HTTPException as exc:
                db.session.rollback()
                response = make_response(http_error_response(exc))
            except Exception as exc:
                db.session.rollback()
                response = make_response(internal_error_response(exc))

            elapsed_ms = (time.perf_counter() - started) * 1000
            try:
                external_service.record_call(system_id, request.path, request.method,
                                             response.status_code, elapsed_ms)
            except SQLAlchemyError:
                db.session.rollback()
                current_app.logger.exception("Failed to record API call for %s", request.path)
            return response
        return wrapper
    return decorator
