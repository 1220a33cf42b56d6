# filters.py
from collections.abc import Mapping
from typing import Iterable, List, Optional, Sequence

from .models.contact import LeadStatus


def _value(record, field):
    if isinstance(record, Mapping):
        if field == 'specialties_text' and field not in record:
            return specialties_text(record.get('specialties') or [])
        return record.get(field)
    return getattr(record, field, None)


def _plain(value):
    """Enum members compare and render by their value"""
    return getattr(value, 'value', value)


def specialties_text(specialties: Iterable) -> str:
    return ', '.join(str(_plain(s)) for s in specialties)


class RecordListFilter:
    """
    Computes the visible subset of a record list for a free-text query.

    A record is kept when the query is a case-insensitive substring of at
    least one of ``fields``. An empty query keeps every record in order.
    With ``active_only`` set, records whose ``is_active`` is false are
    dropped whatever the query.
    """

    def __init__(self, fields: Sequence[str], active_only: bool = False):
        self.fields = tuple(fields)
        self.active_only = active_only

    def __call__(self, records: Iterable, query: Optional[str] = '') -> List:
        return self.filter(records, query)

    def filter(self, records: Iterable, query: Optional[str] = '') -> List:
        visible = list(records)
        if self.active_only:
            visible = [r for r in visible if _value(r, 'is_active')]

        if not query:
            return visible

        needle = query.casefold()
        return [r for r in visible if self.matches(r, needle)]

    def matches(self, record, needle: str) -> bool:
        for field in self.fields:
            value = _value(record, field)
            if value is None:
                continue
            if needle in str(_plain(value)).casefold():
                return True
        return False


contact_filter = RecordListFilter(('name', 'email', 'phone'))
vendor_filter = RecordListFilter(('name', 'specialties_text'), active_only=True)
job_filter = RecordListFilter(('customer_name', 'address'))
equipment_filter = RecordListFilter(('name', 'brand', 'model', 'category'))


def filter_contacts(records, query='', lead_status=None):
    visible = contact_filter(records, query)
    if lead_status is not None:
        wanted = _plain(lead_status)
        visible = [r for r in visible if _plain(_value(r, 'lead_status')) == wanted]
    return visible


def filter_vendors(records, query=''):
    return vendor_filter(records, query)


def filter_jobs(records, query=''):
    return job_filter(records, query)


def filter_equipment(records, query='', category=None, low_stock_only=False):
    visible = equipment_filter(records, query)
    if category is not None:
        wanted = _plain(category)
        visible = [r for r in visible if _plain(_value(r, 'category')) == wanted]
    if low_stock_only:
        visible = [r for r in visible if _value(r, 'quantity') <= _value(r, 'minimum_stock')]
    return visible


SORT_KEYS = ('name', 'created_date', 'lead_status')


def sort_records(records, key='name', ascending=True):
    """Stable sort on one of ``SORT_KEYS``; records missing the key go last."""
    if key not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {key}")

    present = [r for r in records if _value(r, key) is not None]
    missing = [r for r in records if _value(r, key) is None]

    def sort_key(record):
        value = _plain(_value(record, key))
        return value.casefold() if isinstance(value, str) else value

    return sorted(present, key=sort_key, reverse=not ascending) + missing


def count_by_lead_status(records):
    counts = {status.value: 0 for status in LeadStatus}
    for record in records:
        status = _plain(_value(record, 'lead_status'))
        if status in counts:
            counts[status] += 1
    return counts
