# routes/contacts.py
from flask import jsonify, request, abort
from flask_login import login_required

from . import contacts_bp
from ..errors import InvalidFieldValue
from ..filters import SORT_KEYS, count_by_lead_status
from ..models.contact import LeadStatus
from ..schemas.contact_schema import ContactSchema
from ..services.contact_service import ContactService
from ..services.statistics_service import customer_statistics
from ..session import UserSession


def _service():
    return ContactService(UserSession.from_request().current_user)


def _get_or_404(service, contact_id):
    contact = service.get_contact(contact_id)
    if contact is None:
        abort(404)
    return contact


@contacts_bp.route("", methods=["GET"])
@login_required
def list_contacts():
    """
    List contacts visible for a search query.
    ---
    parameters:
      - q: free text matched against name, email and phone
      - lead_status: e.g. "Qualified"
      - sort: name | created_date | lead_status
      - order: asc | desc
    responses:
      200:
        description: {"contacts": [...], "count": n}
    """
    lead_status = request.args.get('lead_status')
    if lead_status:
        try:
            lead_status = LeadStatus(lead_status)
        except ValueError:
            raise InvalidFieldValue('lead_status', f"Unknown lead status: {lead_status}")
    else:
        lead_status = None

    sort_by = request.args.get('sort', 'name')
    if sort_by not in SORT_KEYS:
        raise InvalidFieldValue('sort', f"Sort must be one of {', '.join(SORT_KEYS)}")

    contacts = _service().list_contacts(
        query=request.args.get('q', ''),
        lead_status=lead_status,
        sort_by=sort_by,
        ascending=request.args.get('order', 'asc') != 'desc'
    )
    return jsonify({
        "contacts": ContactSchema(many=True).dump(contacts),
        "count": len(contacts)
    }), 200


@contacts_bp.route("", methods=["POST"])
@login_required
def create_contact():
    """
    Create a new contact
    ---
    requestBody:
      content:
        application/json:
          schema: ContactSchema
    responses:
      201:
        description: Contact created successfully
      400:
        description: Validation error
      500:
        description: Contact could not be saved
    """
    contact, error = _service().create_contact(request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Contact created successfully",
        "contact": ContactSchema().dump(contact)
    }), 201


@contacts_bp.route("/statistics", methods=["GET"])
@login_required
def contact_statistics():
    contacts = _service().list_contacts()
    return jsonify({
        "statistics": customer_statistics(contacts).to_dict(),
        "by_lead_status": count_by_lead_status(contacts)
    }), 200


@contacts_bp.route("/<int:contact_id>", methods=["GET"])
@login_required
def get_contact(contact_id):
    contact = _get_or_404(_service(), contact_id)
    return jsonify({"contact": ContactSchema().dump(contact)}), 200


@contacts_bp.route("/<int:contact_id>", methods=["PUT"])
@login_required
def update_contact(contact_id):
    """Replace every editable field of a contact"""
    service = _service()
    contact = _get_or_404(service, contact_id)
    contact, error = service.update_contact(contact, request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Contact updated successfully",
        "contact": ContactSchema().dump(contact)
    }), 200


@contacts_bp.route("/<int:contact_id>", methods=["DELETE"])
@login_required
def delete_contact(contact_id):
    service = _service()
    service.delete_contact(_get_or_404(service, contact_id))
    return jsonify({"message": "Contact deleted successfully"}), 200
