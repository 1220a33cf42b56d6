# routes/auth.py
from flask import jsonify, request, current_app
from flask_login import login_user, logout_user, login_required

from . import auth_bp
from ..errors import AuthCancelled
from ..session import UserSession

from .. import logger


def _signed_in(user, status=200):
    login_user(user, remember=True)
    return jsonify({"message": "Signed in", "user": user.serialize()}), status


@auth_bp.route("/sign-in", methods=["POST"])
def sign_in():
    """
    Sign in with an external identity or with email and password.

    JSON Payload (external identity):
    {
      "email": "jane@example.com",
      "name": "Jane Doe"
    }

    JSON Payload (password):
    {
      "email": "jane@example.com",
      "password": "..."
    }

    A payload of {"status": "cancelled"} means the user dismissed the
    provider's prompt; it is answered with 204 and no body.
    """
    data = request.get_json(silent=True) or {}
    if data.get('status') == 'cancelled':
        logger.debug("Sign in cancelled by user")
        raise AuthCancelled()

    session = UserSession()
    if 'password' in data:
        user = session.sign_in_with_password(data.get('email'), data.get('password'))
    else:
        user = session.sign_in(data.get('email'), data.get('name'))
    return _signed_in(user)


@auth_bp.route("/sign-up", methods=["POST"])
def sign_up():
    data = request.get_json(silent=True) or {}
    user = UserSession().sign_up(
        data.get('email'),
        data.get('password'),
        data.get('full_name'),
        data.get('company_name') or ''
    )
    return _signed_in(user, 201)


@auth_bp.route("/demo", methods=["POST"])
def sign_in_demo():
    email, name = current_app.config['DEMO_ACCOUNT']
    return _signed_in(UserSession().sign_in(email, name))


@auth_bp.route("/guest", methods=["POST"])
def sign_in_guest():
    email, name = current_app.config['GUEST_ACCOUNT']
    return _signed_in(UserSession().sign_in(email, name))


@auth_bp.route("/sign-out", methods=["POST"])
@login_required
def sign_out():
    UserSession.from_request().sign_out()
    logout_user()
    return jsonify({"message": "Signed out"}), 200


@auth_bp.route("/account", methods=["DELETE"])
@login_required
def delete_account():
    session = UserSession.from_request()
    session.delete_account()
    logout_user()
    return jsonify({"message": "Account deleted"}), 200
