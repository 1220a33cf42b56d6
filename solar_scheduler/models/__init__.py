# models/__init__.py
from .. import db
from datetime import datetime


class BaseModel(db.Model):
    """
    Base model with common fields for all models
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_date = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_date = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    def save(self):
        """
        Save the current model instance to the database.
        If an exception occurs, rollback the session to maintain session consistency.
        """
        try:
            db.session.add(self)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            raise e

    def delete(self):
        """
        Delete the current model instance from the database
        """
        try:
            db.session.delete(self)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            raise e

    @classmethod
    def get_by_id(cls, id):
        """
        Retrieve a model instance by its ID

        Args:
            id (int): Primary key of the model instance

        Returns:
            Model instance or None
        """
        return db.session.get(cls, id)


# Import order matters
from .user import User
from .contact import Contact, LeadStatus, ContactMethod
from .vendor import Vendor, VendorSpecialty
from .job import SolarJob, JobStatus
from .equipment import Equipment
