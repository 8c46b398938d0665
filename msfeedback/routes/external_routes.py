from flask import Blueprint
from msfeedback.utils.enums import Permission
from msfeedback.utils.external_auth import require_api_key
from msfeedback.controllers.external_feedback_controller import (
    submit_feedback_handler,
    feedback_status_handler,
    batch_status_handler,
)

external_bp = Blueprint("external_feedback", __name__, url_prefix="/api/external/feedback")

@external_bp.post("/submit")
@require_api_key(Permission.FEEDBACK_SUBMIT.value)
def submit_feedback():
    return submit_feedback_handler()

@external_bp.get("/status/<feedback_no>")
@require_api_key(Permission.FEEDBACK_QUERY.value)
def feedback_status(feedback_no):
    return feedback_status_handler(feedback_no)

@external_bp.post("/batch-status")
@require_api_key(Permission.FEEDBACK_QUERY.value)
def batch_status():
    return batch_status_handler()
