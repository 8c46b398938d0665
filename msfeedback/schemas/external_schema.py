from marshmallow import Schema, fields, validate, pre_load, EXCLUDE
from msfeedback.schemas.feedback_schema import AttachmentSchema, PRIORITIES
from msfeedback.utils.enums import FeedbackPriority

# Partner integrations historically send "medium"; it is stored as "normal".
PRIORITY_ALIASES = {"medium": FeedbackPriority.NORMAL.value}


class ExternalFeedbackSubmitSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(validate=validate.Length(min=1, max=200))
    content = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
    type = fields.Str(load_default="external", validate=validate.Length(min=1, max=50))
    priority = fields.Str(load_default=FeedbackPriority.NORMAL.value, validate=validate.OneOf(PRIORITIES))
    contact = fields.Str(validate=validate.Length(min=1, max=100))
    attachments = fields.List(fields.Nested(AttachmentSchema), load_default=list)
    external_id = fields.Str(data_key="externalId", validate=validate.Length(min=1, max=255))
    external_data = fields.Dict(data_key="externalData", keys=fields.Str())
    created_at = fields.DateTime(data_key="createdAt", format="iso")

    @pre_load
    def _normalize_priority(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("priority"), str):
            data = dict(data)
            priority = data["priority"].strip().lower()
            data["priority"] = PRIORITY_ALIASES.get(priority, priority)
        return data
