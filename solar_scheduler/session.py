# session.py
from typing import Optional, Tuple

from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from . import db, logger
from .errors import AuthFailure, PersistenceFailure
from .models.contact import Contact
from .models.equipment import Equipment
from .models.job import SolarJob
from .models.user import User
from .models.vendor import Vendor
from .services.statistics_service import StatisticsService, JobStatistics, EquipmentStatistics
from .validation import validate_sign_up_input


def _normalize_email(email):
    return (email or '').strip().lower()


class UserSession:
    """
    The signed-in user's session.

    One instance is built per request around the authenticated user (or
    none); nothing about it is global. The HTTP layer persists the result
    of ``sign_in``/``sign_out`` through Flask-Login.
    """

    def __init__(self, user: Optional[User] = None):
        self.current_user = user

    @classmethod
    def from_request(cls):
        """Session for the user Flask-Login resolved for this request"""
        if current_user and current_user.is_authenticated:
            return cls(current_user._get_current_object())
        return cls()

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to {action}: {str(e)}")
            raise PersistenceFailure(str(e)) from e

    def sign_in(self, email: str, name: str) -> User:
        """
        Sign in with an identity already verified by an external provider.
        Unknown emails get a new account under ``name``.
        """
        email = _normalize_email(email)
        if not email:
            raise AuthFailure("An email address is required to sign in")

        user = User.query.filter_by(email=email).first()
        if user is not None and user.password_hash:
            logger.warning(f"Refused external sign in for password account {email}")
            raise AuthFailure("This account uses a password. Please sign in with your password.")
        if user is None:
            user = User(email=email, full_name=(name or '').strip())
            db.session.add(user)
            logger.info(f"Created account for {email}")

        user.is_active = True
        user.touch_sign_in()
        self._commit('sign in')

        self.current_user = user
        logger.info(f"Signed in {email}")
        return user

    def sign_up(self, email: str, password: str, full_name: str, company_name: str = '') -> User:
        """
        Create a password account and sign it in.
        Raises the validation error for a malformed email or a short password.
        """
        data, error = validate_sign_up_input({
            'email': email,
            'password': password,
            'full_name': full_name or '',
            'company_name': company_name or ''
        })
        if error is not None:
            raise error

        email = data['email']
        if User.query.filter_by(email=email).first() is not None:
            raise AuthFailure("An account with this email already exists")

        user = User(email=email, full_name=data['full_name'], company_name=data['company_name'])
        user.password = data['password']
        user.touch_sign_in()
        db.session.add(user)
        self._commit('sign up')

        self.current_user = user
        logger.info(f"Signed up {email}")
        return user

    def sign_in_with_password(self, email: str, password: str) -> User:
        user = User.query.filter_by(email=_normalize_email(email)).first()
        if user is None:
            raise AuthFailure("User not found. Please sign up first.")
        if not user.verify_password(password or ''):
            raise AuthFailure("Invalid email or password")

        user.is_active = True
        user.touch_sign_in()
        self._commit('sign in')

        self.current_user = user
        return user

    def sign_out(self) -> None:
        if self.current_user is not None:
            self.current_user.touch_sign_in()
            try:
                self._commit('sign out')
            except PersistenceFailure:
                # The user is signed out even if the timestamp could not be saved
                logger.warning(f"Could not record sign out for {self.current_user.email}")
            logger.info(f"Signed out {self.current_user.email}")
        self.current_user = None

    def delete_account(self) -> None:
        """Delete the current user together with every record they own"""
        user = self.current_user
        if user is None:
            return

        for model in (SolarJob, Contact, Vendor, Equipment):
            model.query.filter_by(user_id=user.id).delete(synchronize_session=False)
        db.session.delete(user)
        self._commit('delete account')

        logger.info(f"Deleted account {user.email}")
        self.current_user = None

    def update_profile(self, full_name: Optional[str] = None, company_name: Optional[str] = None) -> User:
        user = self.current_user
        if user is None:
            raise AuthFailure("You must be signed in to update your profile")

        if full_name is not None:
            user.full_name = full_name.strip()
        if company_name is not None:
            user.company_name = company_name.strip()
        self._commit('update profile')
        return user

    def get_user_statistics(self) -> Tuple[Optional[JobStatistics], Optional[EquipmentStatistics]]:
        if self.current_user is None:
            return None, None
        service = StatisticsService(self.current_user)
        return service.job_statistics(), service.equipment_statistics()
