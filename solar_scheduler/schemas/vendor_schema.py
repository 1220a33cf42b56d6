from marshmallow import Schema, fields, validate, pre_load, post_load, EXCLUDE

from ..models.vendor import VendorSpecialty, clamp_rating
from .contact_schema import trim_text_fields

EMAIL_PATTERN = r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}$'
EMAIL_ERROR = "Please enter a valid email address"


def email_field(**kwargs):
    """Required email address checked against EMAIL_PATTERN"""
    return fields.String(
        required=True,
        validate=[
            validate.Length(min=1, max=120),
            validate.Regexp(EMAIL_PATTERN, error=EMAIL_ERROR)
        ],
        **kwargs
    )


class VendorSchema(Schema):
    """
    Schema for Vendor form input and responses.
    Handles email syntax validation, rating clamping and specialty de-duplication.
    """
    TEXT_FIELDS = ('name', 'contact_email', 'contact_phone', 'address', 'website', 'notes')

    class Meta:
        unknown = EXCLUDE

    id = fields.Int(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    contact_email = email_field()
    contact_phone = fields.String(load_default='', validate=validate.Length(max=50))
    address = fields.String(load_default='', validate=validate.Length(max=255))
    website = fields.String(load_default='', validate=validate.Length(max=255))
    notes = fields.String(load_default='')
    specialties = fields.List(
        fields.String(validate=validate.OneOf([s.value for s in VendorSpecialty])),
        load_default=list
    )
    rating = fields.Float(load_default=0.0)
    completed_installations = fields.Int(load_default=0, validate=validate.Range(min=0))
    is_active = fields.Boolean(load_default=True)
    specialties_text = fields.String(dump_only=True)
    created_date = fields.DateTime(dump_only=True)

    @pre_load
    def clean_text(self, data, **kwargs):
        return trim_text_fields(data, self.TEXT_FIELDS)

    @post_load
    def bound_rating(self, data, **kwargs):
        """Ratings outside 0-5 are pulled to the nearest bound"""
        if 'rating' in data:
            data['rating'] = clamp_rating(data['rating'])
        return data

    @post_load
    def dedupe_specialties(self, data, **kwargs):
        """Keep the first occurrence of each specialty"""
        if 'specialties' in data:
            seen = []
            for specialty in data['specialties']:
                if specialty not in seen:
                    seen.append(specialty)
            data['specialties'] = seen
        return data


class VendorRatingSchema(Schema):
    rating = fields.Float(required=True)
