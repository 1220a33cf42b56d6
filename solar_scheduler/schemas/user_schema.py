from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from .contact_schema import trim_text_fields
from .vendor_schema import email_field

MIN_PASSWORD_LENGTH = 6


class SignUpSchema(Schema):
    """
    Schema for creating a password account.
    The email is trimmed and lower-cased; the password is taken as typed.
    """

    class Meta:
        unknown = EXCLUDE

    email = email_field()
    password = fields.String(
        required=True,
        validate=validate.Length(
            min=MIN_PASSWORD_LENGTH,
            error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        ),
        load_only=True
    )
    full_name = fields.String(load_default='', validate=validate.Length(max=100))
    company_name = fields.String(load_default='', validate=validate.Length(max=100))

    @pre_load
    def clean_text(self, data, **kwargs):
        data = trim_text_fields(data, ('email', 'full_name', 'company_name'))
        if isinstance(data, dict) and isinstance(data.get('email'), str):
            data['email'] = data['email'].lower()
        return data
