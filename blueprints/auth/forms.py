"""
Authentication Forms
JSON request bodies for registration, login and password changes
"""
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, EqualTo, Length

from utils.forms import ApiForm


class LoginForm(ApiForm):
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    remember = BooleanField('Remember Me', false_values=(False, 'false', ''))


class RegisterForm(ApiForm):
    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(min=2, max=100, message='Name must be between 2 and 100 characters')
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    password_confirm = PasswordField('Confirm Password', name='passwordConfirm', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords do not match')
    ])


class UpdatePasswordForm(ApiForm):
    current_password = PasswordField('Current Password', name='currentPassword', validators=[
        DataRequired(message='Current password is required')
    ])
    new_password = PasswordField('New Password', name='newPassword', validators=[
        DataRequired(message='New password is required')
    ])
    new_password_confirm = PasswordField('Confirm New Password', name='newPasswordConfirm', validators=[
        DataRequired(message='Please confirm your new password'),
        EqualTo('new_password', message='New passwords do not match')
    ])
