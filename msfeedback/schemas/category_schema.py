from marshmallow import Schema, fields, validate, EXCLUDE

_COLOR = validate.Regexp(r"^#(?:[0-9a-fA-F]{3}){1,2}$", error="Must be a hex color such as #1890ff.")

class CategoryCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True)
    color = fields.Str(allow_none=True, validate=_COLOR)
    is_active = fields.Bool(data_key="isActive", load_default=True)
    sort_order = fields.Int(data_key="sortOrder", load_default=0)
    parent_id = fields.Int(data_key="parentId", allow_none=True, load_default=None)

class CategoryUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True)
    color = fields.Str(validate=_COLOR)
    is_active = fields.Bool(data_key="isActive")
    sort_order = fields.Int(data_key="sortOrder")
    parent_id = fields.Int(data_key="parentId", allow_none=True)
