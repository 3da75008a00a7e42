"""
Credential service.

Registration, password verification with lockout, and password rotation.
Password hashes are produced by werkzeug.security; the User model only
stores them.
"""
import logging
import re
from datetime import datetime, timezone

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db
from models.users import User
from utils.errors import AuthenticationError, ConflictError, ValidationFailedError


logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_password_strength(password):
    """
    Validate password meets security requirements
    Returns: (is_valid, error_message)
    """
    min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
    require_uppercase = current_app.config.get('PASSWORD_REQUIRE_UPPERCASE', True)
    require_lowercase = current_app.config.get('PASSWORD_REQUIRE_LOWERCASE', True)
    require_digit = current_app.config.get('PASSWORD_REQUIRE_DIGIT', True)

    errors = []

    if len(password) < min_length:
        errors.append(f"at least {min_length} characters")

    if require_uppercase and not re.search(r'[A-Z]', password):
        errors.append("an uppercase letter")

    if require_lowercase and not re.search(r'[a-z]', password):
        errors.append("a lowercase letter")

    if require_digit and not re.search(r'\d', password):
        errors.append("a number")

    if errors:
        return False, "Password must contain " + ", ".join(errors)
    return True, None


class AuthService:

    @staticmethod
    def set_password(user, password):
        user.password_hash = generate_password_hash(password)

    @staticmethod
    def check_password(user, password):
        return check_password_hash(user.password_hash, password)

    @staticmethod
    def is_locked(user):
        return bool(user.locked_until and user.locked_until > _utcnow())

    @staticmethod
    def register(name, email, password):
        email = email.strip().lower()
        is_valid, error = validate_password_strength(password)
        if not is_valid:
            raise ValidationFailedError(error)
        if User.query.filter_by(email=email).first():
            raise ConflictError('User with this email already exists')

        user = User(name=name.strip(), email=email, is_active=True)
        AuthService.set_password(user, password)
        db.session.add(user)
        db.session.commit()
        logger.info(f"registered user {user.id}")
        return user

    @staticmethod
    def authenticate(email, password):
        """
        Return the user for valid credentials, else raise AuthenticationError.

        Repeated failures lock the account for LOCKOUT_DURATION.
        """
        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None:
            # Same message as a bad password so emails cannot be enumerated
            raise AuthenticationError()

        if AuthService.is_locked(user):
            minutes_left = int((user.locked_until - _utcnow()).total_seconds() / 60) + 1
            raise AuthenticationError(
                f'Account temporarily locked due to multiple failed login attempts. '
                f'Try again in {minutes_left} minutes.'
            )

        if not user.is_active:
            raise AuthenticationError('This account has been deactivated.')

        if not AuthService.check_password(user, password):
            AuthService.record_failed_login(user)
            raise AuthenticationError()

        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login = _utcnow()
        db.session.commit()
        return user

    @staticmethod
    def record_failed_login(user):
        """Record a failed login attempt and lock if threshold exceeded"""
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1

        max_attempts = current_app.config.get('MAX_LOGIN_ATTEMPTS', 5)
        lockout_duration = current_app.config.get('LOCKOUT_DURATION')

        if user.failed_login_attempts >= max_attempts and lockout_duration:
            user.locked_until = _utcnow() + lockout_duration
            logger.warning(f"user {user.id} locked after {user.failed_login_attempts} failed logins")

        db.session.commit()

    @staticmethod
    def update_password(user, current_password, new_password):
        if not AuthService.check_password(user, current_password):
            raise AuthenticationError('Your current password is incorrect')
        is_valid, error = validate_password_strength(new_password)
        if not is_valid:
            raise ValidationFailedError(error)
        AuthService.set_password(user, new_password)
        db.session.commit()
        return user
