from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from solar_scheduler.errors import InvalidFieldValue, PersistenceFailure
from solar_scheduler.models.contact import Contact, LeadStatus
from solar_scheduler.models.equipment import Equipment, EquipmentCategory
from solar_scheduler.models.job import JobStatus
from solar_scheduler.models.user import User
from solar_scheduler.models.vendor import Vendor
from solar_scheduler.services.contact_service import ContactService
from solar_scheduler.services.equipment_service import EquipmentService
from solar_scheduler.services.job_service import JobService
from solar_scheduler.services.statistics_service import StatisticsService
from solar_scheduler.services.vendor_service import VendorService
from solar_scheduler.stores import ModelStore


def other_user():
    user = User(email='other@example.com', full_name='Other')
    user.save()
    return user


def test_contacts_are_created_listed_and_sorted(owner):
    service = ContactService(owner)
    for name in ('Carla Mendez', 'alice lee', 'Bob'):
        contact, error = service.create_contact({'name': name, 'email': f'{name.split()[0].lower()}@x.com'})
        assert error is None
        assert contact.user_id == owner.id

    assert [c.name for c in service.list_contacts()] == ['alice lee', 'Bob', 'Carla Mendez']
    assert [c.name for c in service.list_contacts(ascending=False)] == ['Carla Mendez', 'Bob', 'alice lee']
    assert [c.name for c in service.list_contacts('LEE')] == ['alice lee']


def test_contacts_filtered_by_lead_status(owner):
    service = ContactService(owner)
    service.create_contact({'name': 'Won Deal', 'lead_status': 'Won'})
    service.create_contact({'name': 'Fresh Lead'})

    won = service.list_contacts(lead_status=LeadStatus.WON)
    assert [c.name for c in won] == ['Won Deal']


def test_contacts_are_scoped_to_their_owner(owner):
    mine, _ = ContactService(owner).create_contact({'name': 'Mine'})
    stranger = other_user()
    ContactService(stranger).create_contact({'name': 'Theirs'})

    assert [c.name for c in ContactService(owner).list_contacts()] == ['Mine']
    assert ContactService(stranger).get_contact(mine.id) is None


def test_contact_update_replaces_editable_fields(owner):
    service = ContactService(owner)
    contact, _ = service.create_contact({'name': 'Alice', 'email': 'a@x.com', 'notes': 'old'})

    updated, error = service.update_contact(contact, {'name': ' Alice Lee ', 'phone': '555'})
    assert error is None
    assert updated.id == contact.id
    assert updated.name == 'Alice Lee'
    assert updated.phone == '555'
    assert updated.email == ''
    assert updated.notes == ''


def test_contact_delete_detaches_jobs(owner):
    contact, _ = ContactService(owner).create_contact({'name': 'Alice'})
    job = JobService(owner).create_job({'customer_name': 'Alice', 'system_size': 6, 'customer_id': contact.id})

    assert contact.active_jobs_count == 1
    ContactService(owner).delete_contact(contact)

    assert Contact.query.count() == 0
    assert job.customer_id is None


def test_store_wraps_database_errors(owner, monkeypatch):
    def broken_save(self):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(Contact, 'save', broken_save)
    contact, error = ContactService(owner).create_contact({'name': 'Alice'})

    assert contact is None
    assert isinstance(error, PersistenceFailure)
    assert 'database is locked' in error.reason


def test_model_store_orders_by_column(owner):
    store = ModelStore(Vendor, owner)
    store.add(name='Zeta', contact_email='z@z.com')
    store.add(name='Alpha', contact_email='a@a.com')
    assert [v.name for v in store.query(sort_by='name')] == ['Alpha', 'Zeta']
    assert [v.name for v in store.query(sort_by='name', ascending=False)] == ['Zeta', 'Alpha']


def test_vendor_list_hides_inactive_and_searches_specialties(owner):
    service = VendorService(owner)
    roofers, _ = service.create_vendor({
        'name': 'Roof Pros', 'contact_email': 'ops@roofpros.com', 'specialties': ['Roofing']
    })
    service.create_vendor({
        'name': 'Old Roofing Co', 'contact_email': 'old@roof.com', 'specialties': ['Roofing'], 'is_active': False
    })
    sparks, _ = service.create_vendor({
        'name': 'Sparks', 'contact_email': 'hi@sparks.io', 'specialties': ['Electrical Work', 'Inspection']
    })

    assert [v.name for v in service.list_vendors()] == ['Roof Pros', 'Sparks']
    assert service.list_vendors('roof') == [roofers]
    assert service.list_vendors('INSPECT') == [sparks]
    assert sparks.specialties_text == 'Electrical Work, Inspection'


def test_vendor_rating_is_clamped_and_saved(owner):
    service = VendorService(owner)
    vendor, _ = service.create_vendor({'name': 'V', 'contact_email': 'v@v.com', 'rating': 9})
    assert vendor.rating == 5.0

    service.rate_vendor(vendor, -1)
    assert Vendor.get_by_id(vendor.id).rating == 0.0
    service.rate_vendor(vendor, '4.5')
    assert vendor.rating == 4.5


def test_job_status_transitions(owner):
    service = JobService(owner)
    job = service.create_job({'customer_name': 'Jane', 'address': '12 Solar Way', 'system_size': 7.5})
    assert job.status is JobStatus.PENDING

    with pytest.raises(InvalidFieldValue):
        service.update_status(job, JobStatus.COMPLETED)

    for status in (JobStatus.APPROVED, JobStatus.IN_PROGRESS, JobStatus.COMPLETED):
        job = service.update_status(job, status)
    assert job.status is JobStatus.COMPLETED
    assert job.last_status_change is not None

    with pytest.raises(InvalidFieldValue):
        service.update_status(job, JobStatus.CANCELLED)


def test_job_rejects_foreign_customer(owner):
    stranger = other_user()
    theirs, _ = ContactService(stranger).create_contact({'name': 'Theirs'})

    with pytest.raises(InvalidFieldValue) as excinfo:
        JobService(owner).create_job({'customer_name': 'X', 'system_size': 3, 'customer_id': theirs.id})
    assert excinfo.value.field == 'customer_id'


def test_job_list_search_and_status(owner):
    service = JobService(owner)
    service.create_job({'customer_name': 'Jane Doe', 'address': '12 Solar Way', 'system_size': 5})
    other = service.create_job({
        'customer_name': 'Sam Roe', 'address': '4 Elm St', 'system_size': 9, 'scheduled_date': '2026-11-02'
    })
    service.update_status(other, JobStatus.APPROVED)

    assert [j.customer_name for j in service.list_jobs('elm')] == ['Sam Roe']
    assert [j.customer_name for j in service.list_jobs(status=JobStatus.PENDING)] == ['Jane Doe']
    assert other.scheduled_date == date(2026, 11, 2)


def test_statistics(owner):
    jobs = JobService(owner)
    done = jobs.create_job({'customer_name': 'A', 'system_size': 10, 'estimated_revenue': 30000})
    for status in (JobStatus.APPROVED, JobStatus.IN_PROGRESS, JobStatus.COMPLETED):
        jobs.update_status(done, status)
    jobs.create_job({'customer_name': 'B', 'system_size': 6, 'estimated_revenue': 15000})

    ModelStore(Equipment, owner).add(name='Panel', category='Panels', quantity=40, unit_cost=250.0, minimum_stock=10)
    ModelStore(Equipment, owner).add(name='Inverter', category='Inverters', quantity=2, unit_cost=1200.0,
                                     minimum_stock=5)

    contacts = ContactService(owner)
    contacts.create_contact({'name': 'W', 'lead_status': 'Won'})
    contacts.create_contact({'name': 'L', 'lead_status': 'Lost'})
    contacts.create_contact({'name': 'N'})
    contacts.create_contact({'name': 'Q', 'lead_status': 'Qualified'})

    service = StatisticsService(owner)
    job_stats = service.job_statistics()
    assert job_stats.total_jobs == 2
    assert job_stats.completed == 1
    assert job_stats.pending == 1
    assert job_stats.total_revenue == 30000
    assert job_stats.average_system_size == 8.0

    equipment_stats = service.equipment_statistics()
    assert equipment_stats.total_items == 2
    assert equipment_stats.total_value == 40 * 250.0 + 2 * 1200.0
    assert equipment_stats.low_stock_items == 1
    assert equipment_stats.categories == 2

    customer_stats = service.customer_statistics()
    assert customer_stats.total_customers == 4
    assert customer_stats.closed_won == 1
    assert customer_stats.closed_lost == 1
    assert customer_stats.new_leads == 1
    assert customer_stats.qualified_leads == 1
    assert customer_stats.conversion_rate == 0.25


def test_statistics_when_empty(owner):
    service = StatisticsService(owner)
    assert service.job_statistics().average_system_size == 0.0
    assert service.customer_statistics().conversion_rate == 0.0
    assert service.equipment_statistics().total_value == 0


def add_item(service, name, category='Solar Panels', **fields):
    item, error = service.create_equipment({'name': name, 'brand': 'Acme', 'model': 'X1', 'category': category, **fields})
    assert error is None, error
    return item


def test_equipment_list_filters_and_orders(owner):
    service = EquipmentService(owner)
    inverter = add_item(service, 'String Inverter', 'Inverters', quantity=2, minimum_stock=5)
    panel = add_item(service, 'Mono Panel', quantity=40, minimum_stock=10)
    add_item(service, 'Harness', 'Safety Equipment', quantity=8, minimum_stock=2)

    assert [i.name for i in service.list_equipment()] == ['Harness', 'Mono Panel', 'String Inverter']
    assert service.list_equipment('mono') == [panel]
    assert service.list_equipment(category=EquipmentCategory.INVERTERS) == [inverter]
    assert service.list_equipment(low_stock_only=True) == [inverter]
    assert service.list_equipment('acme', category='Solar Panels') == [panel]


def test_equipment_stock_adjustment(owner):
    service = EquipmentService(owner)
    item = add_item(service, 'Mono Panel', quantity=10, minimum_stock=3)

    service.adjust_stock(item, 5)
    assert item.quantity == 15
    service.adjust_stock(item, -40)
    assert item.quantity == 0
    assert item.is_low_stock

    with pytest.raises(InvalidFieldValue):
        service.adjust_stock(item, 0)


def test_equipment_edit_and_scope(owner):
    service = EquipmentService(owner)
    item = add_item(service, 'Mono Panel', quantity=10, unit_cost=200.0)

    updated, error = service.update_equipment(item, {
        'name': 'Mono Panel', 'brand': 'Acme', 'model': 'X2', 'category': 'Solar Panels', 'quantity': 12
    })
    assert error is None
    assert updated.model == 'X2'
    assert updated.unit_cost == 0.0
    assert updated.total_value == 0.0

    _, error = service.update_equipment(item, {'name': 'Mono Panel'})
    assert error.field == 'brand'
    assert item.model == 'X2'

    assert EquipmentService(other_user()).get_equipment(item.id) is None
    service.delete_equipment(item)
    assert service.get_equipment(item.id) is None
