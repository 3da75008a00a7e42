"""
Field rules shared by the source and update services.

Each helper returns the cleaned value or raises ``ValidationFailedError``.
"""
import re
from decimal import Decimal, InvalidOperation

from models.financial_sources import FinancialSourceType
from utils.errors import ValidationFailedError


NAME_MAX_LENGTH = 100
INSTITUTION_MAX_LENGTH = 100
TEXT_MAX_LENGTH = 500

COLOR_CODE_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')

CENTS = Decimal('0.01')


def clean_name(name):
    name = (name or '').strip()
    if not name:
        raise ValidationFailedError('Name is required')
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationFailedError(f'Name must be at most {NAME_MAX_LENGTH} characters')
    return name


def clean_source_type(source_type):
    if source_type not in FinancialSourceType.ALL:
        raise ValidationFailedError(
            f'Invalid source type: {source_type}. Must be one of {", ".join(FinancialSourceType.ALL)}'
        )
    return source_type


def clean_optional_text(value, field_name, max_length=TEXT_MAX_LENGTH):
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if len(value) > max_length:
        raise ValidationFailedError(f'{field_name} must be at most {max_length} characters')
    return value


def clean_color_code(color_code):
    if color_code is None or color_code == '':
        return None
    if not COLOR_CODE_RE.match(color_code):
        raise ValidationFailedError('Color code must be a hex color like #1A2B3C')
    return color_code.upper()


def clean_balance(balance):
    """Non-negative amount rounded to 2 decimal places."""
    if balance is None:
        raise ValidationFailedError('Balance is required')
    try:
        amount = Decimal(str(balance))
    except (InvalidOperation, ValueError):
        raise ValidationFailedError('Balance must be a number')
    if not amount.is_finite():
        raise ValidationFailedError('Balance must be a number')
    if amount < 0:
        raise ValidationFailedError('Balance cannot be negative')
    return amount.quantize(CENTS)
