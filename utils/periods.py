"""
Symbolic reporting periods ('week', 'month', 'quarter', 'year').

Months and years are calendar arithmetic (relativedelta), so one month back
from 31 March is 28/29 February, not 30 days.
"""
from datetime import date, datetime
from dateutil.relativedelta import relativedelta

from utils.errors import ValidationFailedError


PERIOD_OFFSETS = {
    'week': relativedelta(days=7),
    'month': relativedelta(months=1),
    'quarter': relativedelta(months=3),
    'year': relativedelta(years=1),
}

DEFAULT_PERIOD = 'month'

# Accepted by listing endpoints to mean "no lower bound"
ALL_PERIODS = 'all'


def resolve_period_start(period=None, now=None):
    """Return the start of *period* counted back from *now*.

    *now* may be a ``date`` or a ``datetime``; the result has the same type.
    Unknown or missing periods fall back to ``DEFAULT_PERIOD``.
    """
    if now is None:
        now = date.today()
    offset = PERIOD_OFFSETS.get((period or '').strip().lower(), PERIOD_OFFSETS[DEFAULT_PERIOD])
    return now - offset


def parse_date(value, field_name='date'):
    """Parse an ISO ``YYYY-MM-DD`` string (or pass through a date).

    Raises ``ValidationFailedError`` on anything that is not a calendar date.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        raise ValidationFailedError(f'Invalid {field_name}: expected YYYY-MM-DD')
