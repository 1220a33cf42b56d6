from flask import Blueprint

# Sign in, sign up and account routes
auth_bp = Blueprint('auth', __name__)

# Contact (customer) management routes
contacts_bp = Blueprint('contacts', __name__)

# Vendor management routes
vendors_bp = Blueprint('vendors', __name__)

# Job handling routes
jobs_bp = Blueprint('jobs', __name__)

# Inventory routes
equipment_bp = Blueprint('equipment', __name__)

# Profile routes
profile_bp = Blueprint('profile', __name__)

# Import route handlers to register routes
from . import (
    auth,
    contacts,
    vendors,
    jobs,
    equipment,
    profile
)
