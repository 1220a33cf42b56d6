# routes/equipment.py
from flask import jsonify, request, abort
from flask_login import login_required
from marshmallow import ValidationError

from . import equipment_bp
from ..errors import InvalidFieldValue
from ..models.equipment import EquipmentCategory
from ..schemas.equipment_schema import EquipmentSchema, StockAdjustmentSchema
from ..services.equipment_service import EquipmentService
from ..session import UserSession


def _service():
    return EquipmentService(UserSession.from_request().current_user)


def _get_or_404(service, equipment_id):
    equipment = service.get_equipment(equipment_id)
    if equipment is None:
        abort(404)
    return equipment


@equipment_bp.route("", methods=["GET"])
@login_required
def list_equipment():
    """
    List inventory items, ordered by name.
    ---
    parameters:
      - q: free text matched against name, brand, model and category
      - category: e.g. "Inverters"
      - low_stock: true to keep only items at or below their minimum stock
    """
    category = request.args.get('category')
    if category:
        try:
            category = EquipmentCategory(category)
        except ValueError:
            raise InvalidFieldValue('category', f"Unknown equipment category: {category}")
    else:
        category = None

    items = _service().list_equipment(
        query=request.args.get('q', ''),
        category=category,
        low_stock_only=request.args.get('low_stock', 'false').lower() in ['true', '1']
    )
    return jsonify({
        "equipment": EquipmentSchema(many=True).dump(items),
        "count": len(items)
    }), 200


@equipment_bp.route("", methods=["POST"])
@login_required
def create_equipment():
    """
    Add an inventory item
    ---
    requestBody:
      content:
        application/json:
          schema: EquipmentSchema
    responses:
      201:
        description: Equipment created successfully
      400:
        description: Validation error
    """
    equipment, error = _service().create_equipment(request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Equipment created successfully",
        "equipment": EquipmentSchema().dump(equipment)
    }), 201


@equipment_bp.route("/<int:equipment_id>", methods=["GET"])
@login_required
def get_equipment(equipment_id):
    equipment = _get_or_404(_service(), equipment_id)
    return jsonify({"equipment": EquipmentSchema().dump(equipment)}), 200


@equipment_bp.route("/<int:equipment_id>", methods=["PUT"])
@login_required
def update_equipment(equipment_id):
    service = _service()
    equipment = _get_or_404(service, equipment_id)
    equipment, error = service.update_equipment(equipment, request.get_json(silent=True) or {})
    if error is not None:
        raise error
    return jsonify({
        "message": "Equipment updated successfully",
        "equipment": EquipmentSchema().dump(equipment)
    }), 200


@equipment_bp.route("/<int:equipment_id>", methods=["DELETE"])
@login_required
def delete_equipment(equipment_id):
    service = _service()
    service.delete_equipment(_get_or_404(service, equipment_id))
    return jsonify({"message": "Equipment deleted successfully"}), 200


@equipment_bp.route("/<int:equipment_id>/stock", methods=["PATCH"])
@login_required
def adjust_stock(equipment_id):
    """
    Add or remove stock.
    JSON Payload: {"adjustment": -3}; stock never drops below zero.
    """
    try:
        validated = StockAdjustmentSchema().load(request.get_json(silent=True) or {})
    except ValidationError as err:
        raise InvalidFieldValue('adjustment', err.messages.get('adjustment', err.messages))

    service = _service()
    equipment = service.adjust_stock(_get_or_404(service, equipment_id), validated['adjustment'])
    return jsonify({
        "message": "Stock updated",
        "equipment": EquipmentSchema().dump(equipment)
    }), 200
