from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..models.job import JobStatus
from .contact_schema import trim_text_fields


class JobCreateSchema(Schema):
    """
    Schema for booking a new installation job.
    - customer_id links the job to an existing contact; without it the
      job carries only the customer's name and address.
    - system_size is in kW.
    """

    class Meta:
        unknown = EXCLUDE

    customer_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    address = fields.String(load_default='', validate=validate.Length(max=255))
    system_size = fields.Float(
        required=True,
        validate=validate.Range(min=0, max=1000, min_inclusive=False),
        metadata={'description': "System size in kW."}
    )
    estimated_revenue = fields.Float(load_default=0.0, validate=validate.Range(min=0, max=1000000))
    notes = fields.String(load_default='')
    scheduled_date = fields.Date(allow_none=True, load_default=None)
    customer_id = fields.Integer(allow_none=True, load_default=None)

    @pre_load
    def clean_text(self, data, **kwargs):
        return trim_text_fields(data, ('customer_name', 'address', 'notes'))


class JobStatusUpdateSchema(Schema):
    status = fields.Enum(JobStatus, by_value=True, required=True)
