# routes/vendors.py
from flask import jsonify, request, abort
from flask_login import login_required
from marshmallow import ValidationError

from . import vendors_bp
from ..errors import InvalidFieldValue
from ..schemas.vendor_schema import VendorSchema, VendorRatingSchema
from ..services.vendor_service import VendorService
from ..session import UserSession


def _service():
    return VendorService(UserSession.from_request().current_user)


def _get_or_404(service, vendor_id):
    vendor = service.get_vendor(vendor_id)
    if vendor is None:
        abort(404)
    return vendor


@vendors_bp.route("", methods=["GET"])
@login_required
def list_vendors():
    """
    Get active vendors, optionally narrowed by ?q= on name and specialties
    ---
    tags:
      - Vendors
    responses:
      200:
        description: List of vendors
    """
    vendors = _service().list_vendors(request.args.get('q', ''))
    return jsonify({
        "vendors": VendorSchema(many=True).dump(vendors),
        "count": len(vendors)
    }), 200


@vendors_bp.route("", methods=["POST"])
@login_required
def create_vendor():
    """
    Create a new vendor
    ---
    tags:
      - Vendors
    requestBody:
      content:
        application/json:
          schema: VendorSchema
    responses:
      201:
        description: Vendor created successfully
      400:
        description: Missing name or email, or invalid email
      500:
        description: Vendor could not be saved
    """
    vendor, error = _service().create_vendor(request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Vendor created successfully",
        "vendor": VendorSchema().dump(vendor)
    }), 201


@vendors_bp.route("/<int:vendor_id>", methods=["GET"])
@login_required
def get_vendor(vendor_id):
    vendor = _get_or_404(_service(), vendor_id)
    return jsonify({"vendor": VendorSchema().dump(vendor)}), 200


@vendors_bp.route("/<int:vendor_id>", methods=["PUT"])
@login_required
def update_vendor(vendor_id):
    service = _service()
    vendor = _get_or_404(service, vendor_id)
    vendor, error = service.update_vendor(vendor, request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Vendor updated successfully",
        "vendor": VendorSchema().dump(vendor)
    }), 200


@vendors_bp.route("/<int:vendor_id>", methods=["DELETE"])
@login_required
def delete_vendor(vendor_id):
    service = _service()
    service.delete_vendor(_get_or_404(service, vendor_id))
    return jsonify({"message": "Vendor deleted successfully"}), 200


@vendors_bp.route("/<int:vendor_id>/rating", methods=["PATCH"])
@login_required
def rate_vendor(vendor_id):
    """
    Rate a vendor.
    JSON Payload: {"rating": 4.5}; values outside 0-5 are clamped.
    """
    try:
        validated = VendorRatingSchema().load(request.get_json(silent=True) or {})
    except ValidationError as err:
        raise InvalidFieldValue('rating', err.messages.get('rating', err.messages))

    service = _service()
    vendor = service.rate_vendor(_get_or_404(service, vendor_id), validated['rating'])
    return jsonify({
        "message": "Vendor rated successfully",
        "vendor": VendorSchema().dump(vendor)
    }), 200
