"""
External System Service

API key resolution for partner integrations, call logging, and key
management used by the CLI and seed script.
"""

import logging
import uuid
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from msfeedback.extensions import db
from msfeedback.models.api_call_log import ApiCallLog
from msfeedback.models.api_key import ApiKey
from msfeedback.models.external_system import ExternalSystem
from msfeedback.utils.auth import generate_api_key, hash_api_key
from msfeedback.utils.enums import Permission
from msfeedback.utils.errors import ForbiddenError, NotFoundError, UnauthorizedError
from msfeedback.utils.permissions import can

logger = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = [p.value for p in Permission]


def extract_api_key(headers) -> Optional[str]:
    """``X-API-Key`` wins over ``Authorization: Bearer <key>``."""
    key = (headers.get("X-API-Key") or "").strip()
    if key:
        return key
    auth_header = headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


def lookup_api_key(raw_key: Optional[str]) -> ApiKey:
    """Find an enabled key by its hash; raises MISSING_API_KEY or INVALID_API_KEY."""
    if not raw_key:
        raise UnauthorizedError("API key is required", code="MISSING_API_KEY")

    key_record = ApiKey.query.filter_by(key=hash_api_key(raw_key), status=True).first()
    if key_record is None:
        raise UnauthorizedError("Invalid API key", code="INVALID_API_KEY")
    return key_record


def ensure_enabled(system: ExternalSystem) -> None:
    if not system.status:
        raise ForbiddenError("External system is disabled", code="SYSTEM_DISABLED")


def authorize(system: ExternalSystem, permission: str) -> None:
    if not can(system, permission):
        raise ForbiddenError(f"Missing permission {permission}", code="INSUFFICIENT_PERMISSIONS")


def touch_key(key_record: ApiKey) -> None:
    key_record.last_used_at = datetime.utcnow()


def record_call(system_id: Optional[int], path: str, method: str, status_code: int, elapsed_ms: int) -> ApiCallLog:
    """Append one ApiCallLog row and commit it independently of the request outcome."""
    entry = ApiCallLog(
        external_system_id=system_id,
        api_path=path[:255],
        method=method,
        status_code=status_code,
        request_id=str(uuid.uuid4()),
        response_time=max(0, int(elapsed_ms)),
    )
    db.session.add(entry)
    db.session.commit()
    return entry


def get_system(name: str) -> ExternalSystem:
    system = ExternalSystem.query.filter_by(name=name).first()
    if system is None:
        raise NotFoundError(f"External system '{name}' not found")
    return system


def create_system(name: str, permissions: Iterable[str] = (), description: Optional[str] = None,
                  rate_limit: int = 100) -> ExternalSystem:
    system = ExternalSystem(
        name=name,
        description=description,
        permissions=list(permissions) or list(DEFAULT_PERMISSIONS),
        rate_limit=rate_limit,
        status=True,
    )
    db.session.add(system)
    db.session.commit()
    logger.info("Registered external system %s", name)
    return system


def issue_key(system: ExternalSystem, raw_key: Optional[str] = None, name: Optional[str] = None) -> Tuple[ApiKey, str]:
    """Store the hash of a new key; the raw key is returned once and never persisted."""
    raw_key = raw_key or generate_api_key()
    record = ApiKey(key=hash_api_key(raw_key), name=name, status=True, external_system_id=system.id)
    db.session.add(record)
    db.session.commit()
    return record, raw_key


def set_system_status(system: ExternalSystem, enabled: bool) -> ExternalSystem:
    system.status = enabled
    db.session.commit()
    return system


def list_systems() -> List[ExternalSystem]:
    return ExternalSystem.query.order_by(ExternalSystem.id.asc()).all()
