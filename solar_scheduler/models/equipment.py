import enum

from .. import db
from . import BaseModel


class EquipmentCategory(enum.Enum):
    PANELS = "Solar Panels"
    INVERTERS = "Inverters"
    MOUNTING = "Mounting Systems"
    ELECTRICAL = "Electrical Components"
    BATTERIES = "Battery Storage"
    MONITORING = "Monitoring Systems"
    TOOLS = "Installation Tools"
    SAFETY = "Safety Equipment"


class Equipment(BaseModel):
    __tablename__ = 'equipment'

    name = db.Column(db.String(100), nullable=False)
    brand = db.Column(db.String(100), nullable=False, default='')
    model = db.Column(db.String(100), nullable=False, default='')
    # One of the EquipmentCategory values
    category = db.Column(db.String(50), nullable=False, default='')
    quantity = db.Column(db.Integer, nullable=False, default=0)
    unit_cost = db.Column(db.Float, nullable=False, default=0.0)
    minimum_stock = db.Column(db.Integer, nullable=False, default=0)
    supplier = db.Column(db.String(100), nullable=False, default='')
    notes = db.Column(db.Text, nullable=False, default='')

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    @property
    def is_low_stock(self):
        return self.quantity <= self.minimum_stock

    @property
    def total_value(self):
        return self.quantity * self.unit_cost

    def adjust_stock(self, amount):
        """Add (or with a negative amount, remove) stock; never below zero"""
        self.quantity = max(0, self.quantity + int(amount))

    def __repr__(self):
        return f"<Equipment {self.name} x{self.quantity}>"
