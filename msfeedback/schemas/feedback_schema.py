from marshmallow import Schema, fields, validate, pre_load, EXCLUDE
from msfeedback.utils.enums import FeedbackPriority, FeedbackStatus

PRIORITIES = [e.value for e in FeedbackPriority]
STATUSES = [e.value for e in FeedbackStatus]


def normalize_enums(data):
    """Accept ``HIGH``/``high`` and ``pending``/``PENDING`` alike."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    if isinstance(data.get("priority"), str):
        data["priority"] = data["priority"].strip().lower()
    if isinstance(data.get("status"), str):
        data["status"] = data["status"].strip().upper()
    return data


class AttachmentSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    file_name = fields.Str(data_key="fileName", required=True, validate=validate.Length(min=1, max=255))
    file_size = fields.Int(data_key="fileSize", required=True, strict=True, validate=validate.Range(min=1))
    file_type = fields.Str(data_key="fileType", required=True, validate=validate.Length(min=1, max=100))
    file_url = fields.Url(data_key="fileUrl", allow_none=True)


class FeedbackCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(allow_none=True, validate=validate.Length(min=1, max=200))
    content = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
    type = fields.Str(load_default="general", validate=validate.Length(min=1, max=50))
    priority = fields.Str(load_default=FeedbackPriority.NORMAL.value, validate=validate.OneOf(PRIORITIES))
    contact = fields.Str(allow_none=True, validate=validate.Length(min=1, max=100))
    category_id = fields.Int(data_key="categoryId", allow_none=True)
    attachments = fields.List(fields.Nested(AttachmentSchema), load_default=list)

    @pre_load
    def _normalize(self, data, **kwargs):
        return normalize_enums(data)


class FeedbackUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(allow_none=True, validate=validate.Length(min=1, max=200))
    content = fields.Str(validate=validate.Length(min=1, max=5000))
    type = fields.Str(validate=validate.Length(min=1, max=50))
    priority = fields.Str(validate=validate.OneOf(PRIORITIES))
    status = fields.Str(validate=validate.OneOf(STATUSES))
    category_id = fields.Int(data_key="categoryId", allow_none=True)
    reply = fields.Str(allow_none=True, validate=validate.Length(max=5000))
    comment = fields.Str(allow_none=True, validate=validate.Length(max=5000))

    @pre_load
    def _normalize(self, data, **kwargs):
        return normalize_enums(data)


class ProcessingSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    action = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    comment = fields.Str(allow_none=True, validate=validate.Length(max=5000))
    status = fields.Str(validate=validate.OneOf(STATUSES))

    @pre_load
    def _normalize(self, data, **kwargs):
        return normalize_enums(data)
