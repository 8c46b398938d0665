"""
Feedback Lifecycle Service

Single entry point for everything that creates or changes feedback items,
used by the admin routes, the external partner API, the seed script and the
CLI:
- Tracking code (feedbackNo) generation
- Creation with attachments and media type detection
- Partial updates with status-change audit logging
- Processing log entries
- Listing with filters and pagination
"""

import logging
import secrets
import string
from datetime import timezone
from typing import Any, Callable, Dict, Optional

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from msfeedback.extensions import db
from msfeedback.models.category import Category
from msfeedback.models.external_system import ExternalSystem
from msfeedback.models.feedback import Feedback, Origin
from msfeedback.models.media_file import MediaFile
from msfeedback.models.processing_log import ProcessingLog
from msfeedback.models.user import User
from msfeedback.services.media_service import aggregate_media_types, detect_media_type, is_allowed_type
from msfeedback.utils.enums import FeedbackPriority, FeedbackStatus, ProcessingAction
from msfeedback.utils.errors import BadRequestError, NotFoundError
from msfeedback.utils.pagination import apply_date_range, apply_sort, contains, paginate

logger = logging.getLogger(__name__)

FEEDBACK_NO_ALPHABET = string.ascii_uppercase + string.digits
FEEDBACK_NO_LENGTH = 6
MAX_INSERT_ATTEMPTS = 5

SORTABLE_FIELDS = {
    "createdAt": Feedback.created_at,
    "updatedAt": Feedback.updated_at,
    "priority": Feedback.priority,
    "status": Feedback.status,
    "feedbackNo": Feedback.feedback_no,
}


def feedback_no_exists(code: str) -> bool:
    return db.session.query(Feedback.id).filter_by(feedback_no=code).first() is not None


def generate_feedback_no(exists: Optional[Callable[[str], bool]] = None, rng=None) -> str:
    """
    Draw a 6-character ``[A-Z0-9]`` code, re-drawing for as long as
    ``exists`` reports it taken.
    """
    exists = exists or feedback_no_exists
    rng = rng or secrets.SystemRandom()
    while True:
        code = "".join(rng.choice(FEEDBACK_NO_ALPHABET) for _ in range(FEEDBACK_NO_LENGTH))
        if not exists(code):
            return code


def operator_label(actor) -> str:
    if isinstance(actor, User):
        return actor.username
    if isinstance(actor, ExternalSystem):
        return actor.name
    return "system"


def _check_attachments(attachments, enforce_types: bool = True):
    config = current_app.config
    max_files = config.get("UPLOAD_MAX_FILES", 5)
    max_size = config.get("UPLOAD_MAX_SIZE", 10 * 1024 * 1024)
    allowed = config.get("UPLOAD_ALLOWED_TYPES", [])

    if len(attachments) > max_files:
        raise BadRequestError(f"At most {max_files} attachments are allowed", errors=[
            {"field": "attachments", "message": f"Must contain at most {max_files} items."}
        ])
    problems = []
    for index, attachment in enumerate(attachments):
        if attachment["file_size"] > max_size:
            problems.append({"field": f"attachments.{index}.fileSize",
                             "message": f"Must be at most {max_size} bytes."})
        if enforce_types and not is_allowed_type(attachment["file_type"], allowed):
            problems.append({"field": f"attachments.{index}.fileType",
                             "message": "File type is not allowed."})
    if problems:
        raise BadRequestError("Invalid attachments", errors=problems)


def _check_category(category_id: Optional[int]):
    if category_id is not None and db.session.get(Category, category_id) is None:
        raise BadRequestError("Category does not exist", errors=[
            {"field": "categoryId", "message": f"Category {category_id} not found."}
        ])


def _naive_utc(value):
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def create_feedback(data: Dict[str, Any], origin: Optional[Origin] = None, enforce_types: bool = True) -> Feedback:
    """
    Create a feedback item in PENDING status together with its media rows.

    Args:
        data: validated fields (snake_case keys as produced by the schemas)
        origin: the submitting user or external system, or None
        enforce_types: check attachment MIME types against UPLOAD_ALLOWED_TYPES

    Returns:
        The committed Feedback
    """
    attachments = data.get("attachments") or []
    _check_attachments(attachments, enforce_types=enforce_types)
    _check_category(data.get("category_id"))

    for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
        feedback = Feedback(
            feedback_no=generate_feedback_no(),
            type=data.get("type") or "general",
            title=data.get("title"),
            content=data["content"],
            priority=data.get("priority") or FeedbackPriority.NORMAL.value,
            status=FeedbackStatus.PENDING.value,
            media_types=aggregate_media_types(attachments),
            contact=data.get("contact"),
            external_id=data.get("external_id"),
            external_data=data.get("external_data"),
            category_id=data.get("category_id"),
        )
        feedback.origin = origin
        created_at = _naive_utc(data.get("created_at"))
        if created_at is not None:
            feedback.created_at = created_at

        for attachment in attachments:
            feedback.media_files.append(MediaFile(
                file_name=attachment["file_name"],
                file_url=attachment.get("file_url") or "",
                file_type=attachment["file_type"],
                file_size=attachment["file_size"],
                media_type=detect_media_type(attachment["file_name"], attachment["file_type"]),
            ))

        db.session.add(feedback)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            # Another request took the same code between the check and the insert.
            if attempt < MAX_INSERT_ATTEMPTS and feedback_no_exists(feedback.feedback_no):
                logger.warning("feedbackNo collision on insert, retrying (attempt %s)", attempt)
                continue
            raise
        logger.info("Created feedback %s (origin=%s, media=%s)",
                    feedback.feedback_no, origin.type if origin else None, feedback.media_types)
        return feedback


def get_feedback(feedback_id: int) -> Feedback:
    feedback = db.session.get(Feedback, feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found")
    return feedback


def find_by_feedback_no(feedback_no: str) -> Optional[Feedback]:
    return Feedback.query.filter_by(feedback_no=feedback_no).first()


def list_feedbacks(
    page: int = 1,
    limit: int = 10,
    keyword: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    type: Optional[str] = None,
    category_id: Optional[int] = None,
    created_from: Optional[str] = None,
    created_to: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> Dict[str, Any]:
    query = Feedback.query

    if keyword:
        query = query.filter(or_(contains(Feedback.title, keyword), contains(Feedback.content, keyword)))

    if status:
        status = status.upper()
        if status not in {s.value for s in FeedbackStatus}:
            raise BadRequestError("Invalid status filter", errors=[{"field": "status", "message": "Unknown status."}])
        query = query.filter(Feedback.status == status)

    if priority:
        priority = priority.lower()
        if priority not in {p.value for p in FeedbackPriority}:
            raise BadRequestError("Invalid priority filter", errors=[{"field": "priority", "message": "Unknown priority."}])
        query = query.filter(Feedback.priority == priority)

    if type:
        query = query.filter(Feedback.type == type)

    if category_id is not None:
        query = query.filter(Feedback.category_id == category_id)

    query = apply_date_range(query, Feedback.created_at, created_from, created_to)
    query = apply_sort(query, Feedback, sort_by, sort_order, SORTABLE_FIELDS, "createdAt")

    return paginate(query, page, limit, lambda f: f.to_dict())


def _append_log(feedback: Feedback, action: str, comment: Optional[str], actor) -> ProcessingLog:
    log = ProcessingLog(
        action=action,
        comment=comment,
        operator=operator_label(actor),
        user_id=actor.id if isinstance(actor, User) else None,
    )
    feedback.processing_logs.append(log)
    return log


def update_feedback(feedback_id: int, changes: Dict[str, Any], actor=None) -> Feedback:
    """
    Apply a partial update. A status change appends a ``status_change`` log
    and a new reply appends a ``reply`` log, in the same commit.
    """
    feedback = get_feedback(feedback_id)
    changes = dict(changes)
    comment = changes.pop("comment", None)

    if "category_id" in changes:
        _check_category(changes["category_id"])

    for field in ("title", "content", "type", "priority", "category_id"):
        if field in changes:
            setattr(feedback, field, changes[field])

    new_status = changes.get("status")
    if new_status is not None and new_status != feedback.status:
        if new_status not in {s.value for s in FeedbackStatus}:
            raise BadRequestError("Invalid status", errors=[{"field": "status", "message": "Unknown status."}])
        old_status = feedback.status
        feedback.status = new_status
        _append_log(feedback, ProcessingAction.STATUS_CHANGE.value,
                    comment or f"Status changed from {old_status} to {new_status}", actor)

    if "reply" in changes and changes["reply"] != feedback.reply:
        feedback.reply = changes["reply"]
        if changes["reply"]:
            _append_log(feedback, ProcessingAction.REPLY.value, changes["reply"], actor)

    db.session.commit()
    return feedback


def add_processing(feedback_id: int, action: str, comment: Optional[str], actor, status: Optional[str] = None) -> ProcessingLog:
    """Append a processing entry; ``status`` optionally transitions the item in the same commit."""
    feedback = get_feedback(feedback_id)
    if status is not None and status != feedback.status:
        if status not in {s.value for s in FeedbackStatus}:
            raise BadRequestError("Invalid status", errors=[{"field": "status", "message": "Unknown status."}])
        feedback.status = status
    log = _append_log(feedback, action, comment, actor)
    db.session.commit()
    return log


def delete_feedback(feedback_id: int) -> None:
    feedback = get_feedback(feedback_id)
    db.session.delete(feedback)
    db.session.commit()
    logger.info("Deleted feedback %s", feedback.feedback_no)


def status_view(feedback: Feedback, log_limit: Optional[int] = None) -> Dict[str, Any]:
    """Partner-facing status snapshot of a feedback item."""
    data = {
        "id": feedback.id,
        "feedbackNo": feedback.feedback_no,
        "status": feedback.status,
        "reply": feedback.reply,
        "mediaTypes": feedback.media_types,
        "externalId": feedback.external_id,
        "createdAt": feedback.created_at.isoformat() if feedback.created_at else None,
        "updatedAt": feedback.updated_at.isoformat() if feedback.updated_at else None,
        "attachments": [m.to_dict() for m in feedback.media_files],
    }
    if log_limit is not None:
        data["operationLogs"] = [
            {
                "action": log.action,
                "content": log.comment,
                "operator": log.operator,
                "createdAt": log.created_at.isoformat() if log.created_at else None,
            }
            for log in feedback.processing_logs[:log_limit]
        ]
    return data
