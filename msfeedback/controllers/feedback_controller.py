from msfeedback.models.feedback import Origin
from msfeedback.schemas.feedback_schema import FeedbackCreateSchema, FeedbackUpdateSchema, ProcessingSchema
from msfeedback.services import feedback_service
from msfeedback.utils.auth import current_user
from msfeedback.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from msfeedback.utils.http import ok, error, json_body, validate_schema, arg_int, arg_str


def list_feedbacks_handler():
    category_id = arg_str("categoryId")
    try:
        category_id = int(category_id) if category_id is not None else None
    except ValueError:
        return error("VALIDATION_ERROR", "Invalid categoryId filter", 400,
                     errors=[{"field": "categoryId", "message": "Not a valid integer."}])

    result = feedback_service.list_feedbacks(
        page=arg_int("page", 1, min_value=1),
        limit=arg_int("limit", DEFAULT_PAGE_SIZE, min_value=1, max_value=MAX_PAGE_SIZE),
        keyword=arg_str("keyword"),
        status=arg_str("status"),
        priority=arg_str("priority"),
        type=arg_str("type"),
        category_id=category_id,
        created_from=arg_str("createdFrom"),
        created_to=arg_str("createdTo"),
        sort_by=arg_str("sortBy"),
        sort_order=arg_str("sortOrder"),
    )
    return ok(result)


def create_feedback_handler():
    data, errors = validate_schema(FeedbackCreateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    feedback = feedback_service.create_feedback(data, origin=Origin.user(current_user().id))
    return ok(feedback.to_dict(), 201, message="Feedback created")


def get_feedback_handler(feedback_id: int):
    feedback = feedback_service.get_feedback(feedback_id)
    return ok(feedback.to_dict(include_logs=True))


def update_feedback_handler(feedback_id: int):
    data, errors = validate_schema(FeedbackUpdateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    feedback = feedback_service.update_feedback(feedback_id, data, actor=current_user())
    return ok(feedback.to_dict(include_logs=True), message="Feedback updated")


def delete_feedback_handler(feedback_id: int):
    feedback_service.delete_feedback(feedback_id)
    return ok(message="Feedback deleted")


def add_processing_handler(feedback_id: int):
    data, errors = validate_schema(ProcessingSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    log = feedback_service.add_processing(
        feedback_id, data["action"], data.get("comment"), current_user(), status=data.get("status")
    )
    return ok(log.to_dict(), 201, message="Processing record added")
