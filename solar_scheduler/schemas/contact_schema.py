from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..models.contact import LeadStatus, ContactMethod


def trim_text_fields(data, text_fields):
    """
    Strip leading/trailing whitespace from free-text fields and turn
    explicit nulls into empty strings. Non-string values are left for the
    field validators to reject.
    """
    if not isinstance(data, dict):
        return data
    cleaned = dict(data)
    for name in text_fields:
        if name not in cleaned:
            continue
        value = cleaned[name]
        if value is None:
            cleaned[name] = ''
        elif isinstance(value, str):
            cleaned[name] = value.strip()
    return cleaned


class ContactSchema(Schema):
    """
    Schema for Contact form input and responses.
    Every free-text field is trimmed before validation; only name is required.
    """
    TEXT_FIELDS = ('name', 'email', 'phone', 'address', 'notes')

    class Meta:
        unknown = EXCLUDE

    id = fields.Int(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.String(load_default='', validate=validate.Length(max=120))
    phone = fields.String(load_default='', validate=validate.Length(max=50))
    address = fields.String(load_default='', validate=validate.Length(max=255))
    notes = fields.String(load_default='')
    lead_status = fields.Enum(LeadStatus, by_value=True, load_default=LeadStatus.NEW_LEAD)
    preferred_contact_method = fields.Enum(ContactMethod, by_value=True, load_default=ContactMethod.EMAIL)
    last_contact_date = fields.DateTime(allow_none=True, load_default=None)
    active_jobs_count = fields.Int(dump_only=True)
    created_date = fields.DateTime(dump_only=True)

    @pre_load
    def clean_text(self, data, **kwargs):
        return trim_text_fields(data, self.TEXT_FIELDS)
