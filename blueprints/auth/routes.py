"""
Authentication Routes
Register, login, logout and password changes over JSON
"""
from flask import current_app
from flask_login import login_user, logout_user, current_user, login_required
from flask_wtf.csrf import generate_csrf
from . import auth_bp
from .forms import LoginForm, RegisterForm, UpdatePasswordForm
from extensions import limiter
from services.auth_service import AuthService
from utils.responses import success, validate_form


@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    """Token for the X-CSRFToken header on state-changing requests"""
    return success({'csrf_token': generate_csrf()})


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    form = validate_form(RegisterForm())
    user = AuthService.register(form.name.data, form.email.data, form.password.data)
    login_user(user)
    current_app.logger.info(f'New user registered: {user.id}')
    return success({'user': user.to_dict()}, 201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")  # Rate limit login attempts
def login():
    form = validate_form(LoginForm())
    user = AuthService.authenticate(form.email.data, form.password.data)
    login_user(user, remember=form.remember.data)
    return success({'user': user.to_dict()})


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    logout_user()
    return success()


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return success({'user': current_user.to_dict()})


@auth_bp.route('/update-password', methods=['PATCH'])
@login_required
def update_password():
    form = validate_form(UpdatePasswordForm())
    AuthService.update_password(current_user, form.current_password.data, form.new_password.data)
    return success({'user': current_user.to_dict()})
