"""
External Feedback Controller

Partner-facing handlers. They run inside ``require_api_key`` so
``g.external_system`` is the authenticated system and call logging is
handled by the decorator.
"""

from flask import current_app, g
from msfeedback.models.feedback import Feedback, Origin
from msfeedback.schemas.external_schema import ExternalFeedbackSubmitSchema
from msfeedback.services import feedback_service
from msfeedback.utils.http import ok, error, json_body, validate_schema

STATUS_LOG_LIMIT = 10


def submit_feedback_handler():
    data, errors = validate_schema(ExternalFeedbackSubmitSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    system = g.external_system
    feedback = feedback_service.create_feedback(data, origin=Origin.external(system.id), enforce_types=False)
    current_app.logger.info("External system %s submitted feedback %s", system.name, feedback.feedback_no)

    return ok({
        "id": feedback.id,
        "feedbackNo": feedback.feedback_no,
        "status": feedback.status,
        "mediaTypes": feedback.media_types,
        "createdAt": feedback.created_at.isoformat(),
        "externalId": data.get("external_id"),
    }, 201, message="Feedback submitted")


def feedback_status_handler(feedback_no: str):
    feedback = feedback_service.find_by_feedback_no(feedback_no)
    if feedback is None:
        return error("FEEDBACK_NOT_FOUND", "Feedback not found", 404)
    return ok(feedback_service.status_view(feedback, log_limit=STATUS_LOG_LIMIT))


def _invalid_feedback_nos():
    return error("INVALID_INPUT", "feedbackNos must be a non-empty array of strings", 400,
                 errors=[{"field": "feedbackNos", "message": "Must be a non-empty list of strings."}])


def batch_status_handler():
    feedback_nos = json_body().get("feedbackNos")
    if not isinstance(feedback_nos, list) or not feedback_nos:
        return _invalid_feedback_nos()

    limit = current_app.config.get("BATCH_QUERY_LIMIT", 100)
    if len(feedback_nos) > limit:
        return error("BATCH_SIZE_EXCEEDED", f"At most {limit} feedbackNos per batch", 400)

    if not all(isinstance(no, str) and no for no in feedback_nos):
        return _invalid_feedback_nos()

    feedbacks = Feedback.query.filter(Feedback.feedback_no.in_(set(feedback_nos))).all()
    by_no = {f.feedback_no: f for f in feedbacks}
    # Preserve request order; unknown codes are omitted
    ordered = [by_no[no] for no in dict.fromkeys(feedback_nos) if no in by_no]
    return ok([feedback_service.status_view(f) for f in ordered])
