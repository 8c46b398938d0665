from marshmallow import Schema, fields, validate, EXCLUDE
from msfeedback.utils.enums import UserStatus

class RegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6))
    first_name = fields.Str(data_key="firstName", allow_none=True)
    last_name = fields.Str(data_key="lastName", allow_none=True)
    phone_number = fields.Str(data_key="phoneNumber", allow_none=True, validate=validate.Length(max=30))

class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))

class UserUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    first_name = fields.Str(data_key="firstName", allow_none=True)
    last_name = fields.Str(data_key="lastName", allow_none=True)
    email = fields.Email()
    phone_number = fields.Str(data_key="phoneNumber", allow_none=True, validate=validate.Length(max=30))
    status = fields.Str(validate=validate.OneOf([e.value for e in UserStatus]))

class ChangePasswordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.Str(data_key="oldPassword", required=True, load_only=True)
    new_password = fields.Str(data_key="newPassword", required=True, load_only=True, validate=validate.Length(min=6))
