# models/vendor.py
import enum

from .. import db
from . import BaseModel

MIN_RATING = 0.0
MAX_RATING = 5.0


class VendorSpecialty(enum.Enum):
    INSTALLATION = "Installation"
    MAINTENANCE = "Maintenance"
    ELECTRICAL = "Electrical Work"
    ROOFING = "Roofing"
    PERMITTING = "Permitting"
    INSPECTION = "Inspection"
    CLEANUP = "Site Cleanup"
    EMERGENCY = "Emergency Repairs"


def clamp_rating(value):
    return max(MIN_RATING, min(MAX_RATING, float(value)))


class Vendor(BaseModel):
    __tablename__ = 'vendors'

    name = db.Column(db.String(100), nullable=False)
    contact_email = db.Column(db.String(120), nullable=False)
    contact_phone = db.Column(db.String(50), nullable=False, default='')
    address = db.Column(db.String(255), nullable=False, default='')
    website = db.Column(db.String(255), nullable=False, default='')
    notes = db.Column(db.Text, nullable=False, default='')

    # Stored as a list of VendorSpecialty values, in the order they were added
    specialties = db.Column(db.JSON, nullable=False, default=list)
    rating = db.Column(db.Float, nullable=False, default=0.0)
    completed_installations = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    @property
    def specialties_text(self):
        return ', '.join(self.specialties or [])

    def update_rating(self, new_rating):
        self.rating = clamp_rating(new_rating)

    def __repr__(self):
        return f"<Vendor {self.name}>"
