from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Operational error carrying the HTTP status and a stable error code."""

    status = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None,
                 errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status
        self.errors = errors


class BadRequestError(AppError):
    status = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status = 409
    code = "CONFLICT"


def flatten_validation_messages(messages, prefix: str = "") -> List[Dict[str, str]]:
    """Turn marshmallow's nested ``messages`` dict into ``[{field, message}]``."""
    out: List[Dict[str, str]] = []
    if isinstance(messages, dict):
        for key, value in messages.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            if key == "_schema":
                field = prefix or "_schema"
            out.extend(flatten_validation_messages(value, field))
    elif isinstance(messages, list):
        for item in messages:
            if isinstance(item, (dict, list)):
                out.extend(flatten_validation_messages(item, prefix))
            else:
                out.append({"field": prefix, "message": str(item)})
    else:
        out.append({"field": prefix, "message": str(messages)})
    return out
