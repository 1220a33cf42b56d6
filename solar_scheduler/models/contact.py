# models/contact.py
import enum

from .. import db
from . import BaseModel


class LeadStatus(enum.Enum):
    NEW_LEAD = "New Lead"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    PROPOSAL = "Proposal Sent"
    NEGOTIATION = "Negotiation"
    WON = "Won"
    LOST = "Lost"


class ContactMethod(enum.Enum):
    EMAIL = "Email"
    PHONE = "Phone"
    TEXT = "Text"
    IN_PERSON = "In Person"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Contact(BaseModel):
    """
    A customer or lead. Only ``name`` is required; every other free-text
    field defaults to an empty string.
    """
    __tablename__ = 'contacts'

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False, default='')
    phone = db.Column(db.String(50), nullable=False, default='')
    address = db.Column(db.String(255), nullable=False, default='')
    notes = db.Column(db.Text, nullable=False, default='')
    lead_status = db.Column(
        db.Enum(LeadStatus, values_callable=_enum_values, name='lead_status'),
        nullable=False,
        default=LeadStatus.NEW_LEAD
    )
    preferred_contact_method = db.Column(
        db.Enum(ContactMethod, values_callable=_enum_values, name='contact_method'),
        nullable=False,
        default=ContactMethod.EMAIL
    )
    last_contact_date = db.Column(db.DateTime, nullable=True)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    @property
    def active_jobs_count(self):
        from .job import JobStatus
        return sum(1 for job in self.jobs if job.status in (JobStatus.PENDING, JobStatus.IN_PROGRESS))

    def __repr__(self):
        return f"<Contact {self.name}>"
