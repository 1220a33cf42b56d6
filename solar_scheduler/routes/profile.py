# routes/profile.py
from flask import jsonify, request
from flask_login import login_required

from . import profile_bp
from ..session import UserSession


@profile_bp.route("", methods=["GET"])
@login_required
def get_profile():
    return jsonify({"user": UserSession.from_request().current_user.serialize()}), 200


@profile_bp.route("", methods=["PUT"])
@login_required
def update_profile():
    """
    Update the signed-in user's name and company.
    Fields left out of the payload keep their current value.
    """
    data = request.get_json(silent=True) or {}
    user = UserSession.from_request().update_profile(
        full_name=data.get('full_name'),
        company_name=data.get('company_name')
    )
    return jsonify({"message": "Profile updated", "user": user.serialize()}), 200


@profile_bp.route("/statistics", methods=["GET"])
@login_required
def get_statistics():
    job_stats, equipment_stats = UserSession.from_request().get_user_statistics()
    return jsonify({
        "jobs": job_stats.to_dict() if job_stats else None,
        "equipment": equipment_stats.to_dict() if equipment_stats else None
    }), 200
