# services/contact_service.py
from functools import partial
from typing import List, Optional

from ..filters import filter_contacts, sort_records
from ..forms import ContactFormController
from ..models.contact import Contact
from ..state import ListState, RecordsLoaded, QueryChanged, reduce_list
from ..stores import ModelStore

from .. import logger


class ContactService:
    """Contact list, create/edit and delete for one signed-in user"""

    def __init__(self, owner=None, store=None):
        self.store = store or ModelStore(Contact, owner)

    def list_contacts(self, query: str = '', lead_status=None,
                      sort_by: str = 'name', ascending: bool = True) -> List[Contact]:
        state = ListState(filter_fn=partial(filter_contacts, lead_status=lead_status))
        state = reduce_list(state, RecordsLoaded(self.store.query()))
        state = reduce_list(state, QueryChanged(query))
        return sort_records(state.visible, sort_by, ascending)

    def get_contact(self, contact_id: int) -> Optional[Contact]:
        return self.store.get(contact_id)

    def create_contact(self, data: dict):
        logger.info(f"Creating new contact with data: {data}")
        return ContactFormController(self.store).submit(data)

    def update_contact(self, contact: Contact, data: dict):
        logger.info(f"Updating contact {contact.id}")
        return ContactFormController(self.store, contact).submit(data)

    def delete_contact(self, contact: Contact) -> None:
        self.store.delete(contact)
