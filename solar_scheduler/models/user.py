# models/user.py
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime
from . import BaseModel
from .. import db


class User(UserMixin, BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(100), nullable=False, default='')
    company_name = db.Column(db.String(100), nullable=False, default='')
    password_hash = db.Column(db.String(255), nullable=True)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_sign_in_date = db.Column(db.DateTime)

    @property
    def password(self):
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        # Accounts created through an external identity provider have no password
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def touch_sign_in(self):
        self.last_sign_in_date = datetime.now()

    def serialize(self):
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name,
            'company_name': self.company_name,
            'is_active': self.is_active,
            'last_sign_in_date': self.last_sign_in_date.isoformat() if self.last_sign_in_date else None,
            'created_date': self.created_date.isoformat() if self.created_date else None
        }

    def __repr__(self):
        return f'<User {self.email}>'
