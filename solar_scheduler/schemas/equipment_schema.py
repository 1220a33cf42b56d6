from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..models.equipment import EquipmentCategory
from .contact_schema import trim_text_fields


class EquipmentSchema(Schema):
    """
    Schema for inventory items.
    Name, brand, model and category are required; stock figures are bounded.
    """
    TEXT_FIELDS = ('name', 'brand', 'model', 'supplier', 'notes')

    class Meta:
        unknown = EXCLUDE

    id = fields.Int(dump_only=True)
    name = fields.String(
        required=True,
        validate=[
            validate.Length(min=2, error="Equipment name must be at least 2 characters"),
            validate.Length(max=100)
        ]
    )
    brand = fields.String(required=True, validate=validate.Length(min=1, max=100))
    model = fields.String(required=True, validate=validate.Length(min=1, max=100))
    category = fields.String(required=True, validate=validate.OneOf([c.value for c in EquipmentCategory]))
    quantity = fields.Int(load_default=0, validate=validate.Range(min=0, max=10000))
    unit_cost = fields.Float(load_default=0.0, validate=validate.Range(min=0, max=100000))
    minimum_stock = fields.Int(load_default=0, validate=validate.Range(min=0))
    supplier = fields.String(load_default='', validate=validate.Length(max=100))
    notes = fields.String(load_default='')
    is_low_stock = fields.Boolean(dump_only=True)
    total_value = fields.Float(dump_only=True)
    created_date = fields.DateTime(dump_only=True)

    @pre_load
    def clean_text(self, data, **kwargs):
        return trim_text_fields(data, self.TEXT_FIELDS)


class StockAdjustmentSchema(Schema):
    adjustment = fields.Int(required=True, validate=validate.Range(min=-10000, max=10000))
