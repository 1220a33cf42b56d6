# state.py
"""
Explicit state for list screens and edit forms.

State objects are immutable; the only way to change one is to pass it and
an event to its reducer, which returns a new state.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import RecordError

CREATE = 'create'
EDIT = 'edit'


# List events

@dataclass(frozen=True)
class RecordsLoaded:
    records: Tuple


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class ListState:
    filter_fn: Callable
    records: Tuple = ()
    query: str = ''
    visible: Tuple = ()


def reduce_list(state: ListState, event) -> ListState:
    if isinstance(event, RecordsLoaded):
        records = tuple(event.records)
        return replace(state, records=records, visible=tuple(state.filter_fn(records, state.query)))
    if isinstance(event, QueryChanged):
        query = event.query or ''
        return replace(state, query=query, visible=tuple(state.filter_fn(state.records, query)))
    raise TypeError(f"Unknown list event: {event!r}")


# Form events

@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: Any


@dataclass(frozen=True)
class SubmitFailed:
    error: RecordError


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class FormState:
    mode: str = CREATE
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[RecordError] = None
    closed: bool = False


def reduce_form(state: FormState, event) -> FormState:
    if state.closed:
        return state
    if isinstance(event, FieldChanged):
        fields = dict(state.fields)
        fields[event.name] = event.value
        return replace(state, fields=fields, error=None)
    if isinstance(event, SubmitFailed):
        return replace(state, error=event.error)
    if isinstance(event, (SubmitSucceeded, Cancelled)):
        # Field values belong to the editing session and go with it
        return replace(state, fields={}, error=None, closed=True)
    raise TypeError(f"Unknown form event: {event!r}")
