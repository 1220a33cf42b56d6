from collections.abc import Mapping

from marshmallow import ValidationError

from .errors import MissingRequiredField, InvalidEmailFormat, InvalidFieldValue
from .schemas.contact_schema import ContactSchema
from .schemas.equipment_schema import EquipmentSchema
from .schemas.job_schemas import JobCreateSchema
from .schemas.user_schema import SignUpSchema
from .schemas.vendor_schema import VendorSchema, EMAIL_ERROR

EMAIL_FIELDS = ('email', 'contact_email')


def _translate(err, data, required):
    """
    Map marshmallow messages onto a single RecordError.
    Required fields are reported first, in the order given.
    """
    messages = err.messages if isinstance(err.messages, dict) else {'_schema': err.messages}
    if not isinstance(data, Mapping):
        return InvalidFieldValue('_schema', messages.get('_schema', 'Invalid input type'))

    for field in required:
        if field not in messages:
            continue
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            return MissingRequiredField(field)
        if field in EMAIL_FIELDS and isinstance(value, str) and EMAIL_ERROR in messages[field]:
            return InvalidEmailFormat(value.strip(), field=field)
        return InvalidFieldValue(field, messages[field])

    field, field_messages = next(iter(messages.items()))
    return InvalidFieldValue(field, field_messages)


def _validate(schema, data, required):
    try:
        validated_data = schema.load(data)
        return validated_data, None
    except ValidationError as err:
        return None, _translate(err, data, required)


def validate_contact_input(data):
    return _validate(ContactSchema(), data, ('name',))


def validate_vendor_input(data):
    return _validate(VendorSchema(), data, ('name', 'contact_email'))


def validate_equipment_input(data):
    return _validate(EquipmentSchema(), data, ('name', 'brand', 'model', 'category'))


def validate_job_input(data):
    return _validate(JobCreateSchema(), data, ('customer_name',))


def validate_sign_up_input(data):
    return _validate(SignUpSchema(), data, ('email', 'password'))
