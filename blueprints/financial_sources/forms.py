"""
Request bodies for financial sources and their balance updates.

Field names follow the client's camelCase JSON keys via ``name=``.
"""
from wtforms import StringField, DecimalField, BooleanField, DateField
from wtforms.validators import AnyOf, DataRequired, Length, NumberRange, Optional, Regexp

from utils.forms import ApiForm
from models.financial_sources import FinancialSourceType

COLOR_CODE_PATTERN = r'^#[0-9A-Fa-f]{6}$'
FALSE_VALUES = (False, 'false', 'False', '0', '')


class FinancialSourceForm(ApiForm):
    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100, message='Name must be less than 100 characters')
    ])
    type = StringField('Type', validators=[
        DataRequired(message='Type is required'),
        AnyOf(FinancialSourceType.ALL, message='Invalid financial source type')
    ])
    institution = StringField('Institution', validators=[Optional(), Length(max=100)])
    description = StringField('Description', validators=[Optional(), Length(max=500)])
    color_code = StringField('Color code', name='colorCode', validators=[
        Optional(),
        Regexp(COLOR_CODE_PATTERN, message='Color code must look like #1A2B3C')
    ])
    initial_balance = DecimalField('Initial balance', name='initialBalance', validators=[
        Optional(),
        NumberRange(min=0, message='Balance cannot be negative')
    ])
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])


class FinancialSourceUpdateForm(ApiForm):
    """PATCH body for a source; every field optional"""
    name = StringField('Name', validators=[Optional(), Length(max=100)])
    type = StringField('Type', validators=[
        Optional(),
        AnyOf(FinancialSourceType.ALL, message='Invalid financial source type')
    ])
    institution = StringField('Institution', validators=[Optional(), Length(max=100)])
    description = StringField('Description', validators=[Optional(), Length(max=500)])
    color_code = StringField('Color code', name='colorCode', validators=[
        Optional(),
        Regexp(COLOR_CODE_PATTERN, message='Color code must look like #1A2B3C')
    ])
    is_active = BooleanField('Active', name='isActive', false_values=FALSE_VALUES)


class BalanceUpdateForm(ApiForm):
    # Presence is checked by the service; a zero balance must pass here
    balance = DecimalField('Balance', validators=[
        Optional(),
        NumberRange(min=0, message='Balance cannot be negative')
    ])
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])
    date = DateField('Date', format='%Y-%m-%d', validators=[Optional()])


class BalanceUpdateEditForm(ApiForm):
    """PATCH body for a balance update; every field optional"""
    balance = DecimalField('Balance', validators=[
        Optional(),
        NumberRange(min=0, message='Balance cannot be negative')
    ])
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])
    date = DateField('Date', format='%Y-%m-%d', validators=[Optional()])
