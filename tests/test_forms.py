from datetime import datetime
from types import SimpleNamespace

from solar_scheduler.errors import MissingRequiredField, InvalidEmailFormat, PersistenceFailure
from solar_scheduler.forms import ContactFormController, VendorFormController
from solar_scheduler.models.contact import LeadStatus, ContactMethod
from solar_scheduler.state import CREATE, EDIT
from solar_scheduler.stores import RecordStore


class RecordingStore(RecordStore):
    """Store that remembers every call and optionally fails writes"""

    def __init__(self, fail_with=None):
        self.calls = []
        self.fail_with = fail_with

    def add(self, **fields):
        self.calls.append(('add', fields))
        if self.fail_with:
            raise PersistenceFailure(self.fail_with)
        return SimpleNamespace(id=1, **fields)

    def update(self, record, **fields):
        self.calls.append(('update', record, fields))
        if self.fail_with:
            raise PersistenceFailure(self.fail_with)
        for key, value in fields.items():
            setattr(record, key, value)
        return record


def existing_contact():
    return SimpleNamespace(
        id=7,
        name='Alice Lee',
        email='a@x.com',
        phone='555-0100',
        address='1 Main St, Springfield',
        notes='Prefers mornings',
        lead_status=LeadStatus.QUALIFIED,
        preferred_contact_method=ContactMethod.PHONE,
        last_contact_date=datetime(2026, 9, 30, 14, 5),
        created_date=datetime(2026, 1, 2, 9, 0),
    )


def existing_vendor():
    return SimpleNamespace(
        id=3,
        name='Roof Pros',
        contact_email='ops@roofpros.com',
        contact_phone='555-0199',
        address='',
        website='https://roofpros.example',
        notes='',
        specialties=['Roofing', 'Inspection'],
        rating=4.5,
        completed_installations=12,
        is_active=True,
    )


def test_create_mode_submits_trimmed_record():
    store = RecordingStore()
    controller = ContactFormController(store)
    assert controller.mode == CREATE
    assert controller.initial_fields() == {}

    controller.set_field('name', '  Alice Lee  ')
    controller.set_field('email', ' a@x.com ')
    record, error = controller.submit()

    assert error is None
    assert record.name == 'Alice Lee'
    assert store.calls[0][0] == 'add'
    assert store.calls[0][1]['email'] == 'a@x.com'
    assert not controller.is_open


def test_empty_name_never_reaches_the_store():
    store = RecordingStore()
    controller = ContactFormController(store)
    record, error = controller.submit({'name': '', 'email': 'a@x.com'})

    assert record is None
    assert isinstance(error, MissingRequiredField)
    assert store.calls == []
    assert controller.is_open
    assert controller.error is error


def test_vendor_invalid_email_never_reaches_the_store():
    store = RecordingStore()
    record, error = VendorFormController(store).submit({'name': 'Roof Pros', 'contact_email': 'not-an-email'})
    assert record is None
    assert isinstance(error, InvalidEmailFormat)
    assert store.calls == []


def test_persistence_failure_keeps_form_open():
    store = RecordingStore(fail_with='disk full')
    controller = ContactFormController(store)
    record, error = controller.submit({'name': 'Alice'})

    assert record is None
    assert isinstance(error, PersistenceFailure)
    assert error.reason == 'disk full'
    assert controller.is_open
    assert controller.state.fields == {}  # submitted fields were passed explicitly


def test_edit_mode_prepopulates_from_record():
    controller = ContactFormController(RecordingStore(), existing_contact())
    assert controller.mode == EDIT
    fields = controller.initial_fields()
    assert fields['name'] == 'Alice Lee'
    assert fields['lead_status'] == 'Qualified'
    assert 'id' not in fields
    assert 'created_date' not in fields
    assert controller.state.fields == fields


def test_unchanged_contact_edit_updates_with_identical_values():
    record = existing_contact()
    before = dict(vars(record))
    store = RecordingStore()

    saved, error = ContactFormController(store, record).submit()

    assert error is None
    assert saved is record
    (kind, target, fields), = store.calls
    assert kind == 'update'
    assert target is record
    for name, value in fields.items():
        assert value == before[name], name
    assert set(fields) == {
        'name', 'email', 'phone', 'address', 'notes',
        'lead_status', 'preferred_contact_method', 'last_contact_date'
    }


def test_unchanged_vendor_edit_updates_with_identical_values():
    record = existing_vendor()
    before = dict(vars(record))
    store = RecordingStore()

    _, error = VendorFormController(store, record).submit()

    assert error is None
    (_, _, fields), = store.calls
    assert fields == {name: before[name] for name in fields}


def test_edit_changes_only_what_was_edited():
    record = existing_contact()
    store = RecordingStore()
    controller = ContactFormController(store, record)
    controller.set_field('phone', ' 555-0111 ')
    controller.submit()

    fields = store.calls[0][2]
    assert fields['phone'] == '555-0111'
    assert fields['name'] == 'Alice Lee'
    assert record.phone == '555-0111'


def test_cancel_discards_fields_without_storing():
    store = RecordingStore()
    controller = ContactFormController(store, existing_contact())
    controller.set_field('name', 'Changed')
    controller.cancel()
    assert not controller.is_open
    assert controller.state.fields == {}
    assert store.calls == []
