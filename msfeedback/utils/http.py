from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from flask import request, jsonify
from marshmallow import ValidationError

from msfeedback.utils.errors import flatten_validation_messages


def ok(payload: Any = None, status: int = 200, message: Optional[str] = None):
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if payload is not None:
        body["data"] = payload
    return jsonify(body), status


def error(code: str, message: str, status: int = 400, errors: Optional[List[Dict[str, Any]]] = None, **extra):
    body: Dict[str, Any] = {"success": False, "message": message, "code": code}
    if errors:
        body["errors"] = errors
    if extra:
        body.update(extra)
    return jsonify(body), status


def json_body() -> Dict[str, Any]:
    # force=True accepts bodies sent without a JSON Content-Type
    data = request.get_json(force=True, silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict() if request.form else {}


def validate_schema(schema_cls, data: Any, partial: bool = False) -> Tuple[Optional[Dict[str, Any]], Optional[List[Dict[str, str]]]]:
    """Load ``data`` through ``schema_cls``; returns ``(data, None)`` or ``(None, errors)``."""
    try:
        return schema_cls().load(data, partial=partial), None
    except ValidationError as exc:
        return None, flatten_validation_messages(exc.messages)


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None:
        return default
    val = val.strip()
    return val or default


def arg_int(name: str, default: int, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    try:
        v = int(request.args.get(name, default))
    except (TypeError, ValueError):
        v = default
    if min_value is not None:
        v = max(min_value, v)
    if max_value is not None:
        v = min(max_value, v)
    return v


def arg_bool(name: str) -> Optional[bool]:
    val = request.args.get(name)
    if val is None or val == "":
        return None
    return val.lower() in ("1", "true", "yes")


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Stored timestamps are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
