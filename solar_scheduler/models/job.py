import enum

from sqlalchemy.orm import relationship
from .. import db
from . import BaseModel


class JobStatus(enum.Enum):
    """
    Enum representing possible job statuses.
    """
    PENDING = "Pending"
    APPROVED = "Approved"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# Allowed status changes; completed and cancelled jobs are final
JOB_STATUS_TRANSITIONS = {
    JobStatus.PENDING: (JobStatus.APPROVED, JobStatus.CANCELLED),
    JobStatus.APPROVED: (JobStatus.IN_PROGRESS, JobStatus.ON_HOLD, JobStatus.CANCELLED),
    JobStatus.IN_PROGRESS: (JobStatus.COMPLETED, JobStatus.ON_HOLD, JobStatus.CANCELLED),
    JobStatus.ON_HOLD: (JobStatus.IN_PROGRESS, JobStatus.CANCELLED),
    JobStatus.COMPLETED: (),
    JobStatus.CANCELLED: (),
}


class SolarJob(BaseModel):
    """
    An installation job for a customer.

    ``customer_id`` is optional: a job can be booked against a name and
    address before the customer exists as a contact.
    """

    __tablename__ = 'jobs'

    customer_name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255), nullable=False, default='')
    system_size = db.Column(db.Float, nullable=False, doc="System size in kW.")
    estimated_revenue = db.Column(db.Float, nullable=False, default=0.0)
    notes = db.Column(db.Text, nullable=False, default='')
    scheduled_date = db.Column(db.Date, nullable=True)
    status = db.Column(
        db.Enum(JobStatus, values_callable=lambda e: [m.value for m in e], name='job_status'),
        nullable=False,
        default=JobStatus.PENDING
    )
    last_status_change = db.Column(db.DateTime, nullable=True)

    customer_id = db.Column(db.Integer, db.ForeignKey('contacts.id'), nullable=True)
    customer = relationship('Contact', backref=db.backref('jobs', lazy=True))

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    def can_transition_to(self, new_status):
        return new_status in JOB_STATUS_TRANSITIONS.get(self.status, ())

    def serialize(self):
        return {
            'id': self.id,
            'customer_name': self.customer_name,
            'address': self.address,
            'system_size': self.system_size,
            'estimated_revenue': self.estimated_revenue,
            'notes': self.notes,
            'scheduled_date': self.scheduled_date.isoformat() if self.scheduled_date else None,
            'status': self.status.value,
            'customer_id': self.customer_id,
            'created_date': self.created_date.isoformat() if self.created_date else None
        }

    def __repr__(self):
        return f"<SolarJob {self.id} {self.customer_name} {self.status.value}>"
