# forms.py
from . import logger
from .errors import RecordError
from .schemas.contact_schema import ContactSchema
from .schemas.equipment_schema import EquipmentSchema
from .schemas.vendor_schema import VendorSchema
from .state import (
    CREATE, EDIT, FormState, FieldChanged, SubmitFailed, SubmitSucceeded, Cancelled, reduce_form
)
from .validation import validate_contact_input, validate_vendor_input, validate_equipment_input


class RecordFormController:
    """
    Drives one create or edit form for a record.

    The mode is fixed at construction: passing ``record`` opens the form in
    edit mode with every editable field pre-populated from it. ``submit``
    returns ``(record, None)`` on success and ``(None, error)`` otherwise;
    validation failures never reach the store.
    """
    schema_class = None
    validator = None

    def __init__(self, store, record=None):
        self.store = store
        self.record = record
        mode = EDIT if record is not None else CREATE
        self.state = FormState(mode=mode, fields=self.initial_fields())

    @property
    def mode(self):
        return self.state.mode

    @property
    def error(self):
        return self.state.error

    @property
    def is_open(self):
        return not self.state.closed

    @property
    def editable_fields(self):
        return tuple(self.schema_class().load_fields)

    def initial_fields(self):
        """Form values for the record being edited, in their input representation"""
        if self.record is None:
            return {}
        dumped = self.schema_class().dump(self.record)
        return {name: dumped[name] for name in self.editable_fields if name in dumped}

    def set_field(self, name, value):
        self.state = reduce_form(self.state, FieldChanged(name, value))

    def cancel(self):
        self.state = reduce_form(self.state, Cancelled())

    def submit(self, fields=None):
        data = dict(self.state.fields if fields is None else fields)

        validated, error = self.validator(data)
        if error is not None:
            self.state = reduce_form(self.state, SubmitFailed(error))
            return None, error

        try:
            if self.record is None:
                record = self.store.add(**validated)
            else:
                record = self.store.update(self.record, **validated)
        except RecordError as e:
            logger.error(f"Failed to save {self.mode} form: {e.message}")
            self.state = reduce_form(self.state, SubmitFailed(e))
            return None, e

        self.record = record
        self.state = reduce_form(self.state, SubmitSucceeded())
        return record, None


class ContactFormController(RecordFormController):
    schema_class = ContactSchema
    validator = staticmethod(validate_contact_input)


class VendorFormController(RecordFormController):
    schema_class = VendorSchema
    validator = staticmethod(validate_vendor_input)


class EquipmentFormController(RecordFormController):
    schema_class = EquipmentSchema
    validator = staticmethod(validate_equipment_input)
