"""
Net Worth Service
=================
Derives a user's net worth from their financial sources and the dated balance
updates recorded against each one.

Rules
-----
  Latest balance  for each source the authoritative update is the one with the
                  greatest (date, created_at) pair, so several updates on the
                  same day resolve to the last one written.
  Active only     inactive sources never contribute, however recent their
                  updates.  This also applies to history: a deactivated
                  source disappears from past dates too.
  No updates      a source without updates contributes 0.

History
-------
The series only reports dates on which at least one update was observed (no
daily fill-in).  A running map of each source's latest known balance is
carried forward across those dates, so a date's total includes sources whose
last update came earlier.

Primary entry points
--------------------
  calculate_current_networth(): today's total as a Decimal
  calculate_historical_networth(): per-date series since a period start
  latest_update() / build_history(): the pure selection rules shared by both
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, type_coerce

from extensions import db
from models.financial_sources import FinancialSource
from models.financial_source_updates import FinancialSourceUpdate
from utils.db_helpers import owned_query
from utils.periods import resolve_period_start


logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _observation_date(update):
    """Return *update*.date as a ``date``; raise ValueError if it is not one."""
    value = update.date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], '%Y-%m-%d').date()
    raise ValueError(f'unusable date {value!r}')


def _write_order(update):
    return update.created_at or datetime.min


def _load_updates(source_ids, start_date=None):
    """
    Update rows for *source_ids*, oldest first.

    The date column is read as stored text so one corrupt value is skipped by
    the selection rules instead of failing the whole result set.
    """
    query = db.session.query(
        FinancialSourceUpdate.id,
        FinancialSourceUpdate.financial_source_id,
        FinancialSourceUpdate.balance,
        type_coerce(FinancialSourceUpdate.date, String).label('date'),
        FinancialSourceUpdate.created_at,
    ).filter(FinancialSourceUpdate.financial_source_id.in_(source_ids))
    if start_date is not None:
        query = query.filter(FinancialSourceUpdate.date >= start_date)
    return query.order_by(
        FinancialSourceUpdate.date.asc(),
        FinancialSourceUpdate.created_at.asc()
    ).all()


class NetWorthService:
    """
    Current and historical net worth for a single user.

    All methods are read-only; nothing here writes to the database.
    """

    @staticmethod
    def latest_update(updates):
        """Return the authoritative update among *updates*, or None if empty."""
        latest = None
        latest_key = None
        for update in updates:
            try:
                key = (_observation_date(update), _write_order(update))
            except (TypeError, ValueError):
                logger.warning(f"Invalid date format for update {update.id}: {update.date!r}; skipping")
                continue
            if latest_key is None or key > latest_key:
                latest, latest_key = update, key
        return latest

    @staticmethod
    def sum_latest_balances(sources, updates):
        """Sum the latest balance of every active source in *sources*."""
        by_source = {}
        for update in updates:
            by_source.setdefault(update.financial_source_id, []).append(update)

        total = ZERO
        for source in sources:
            if not source.is_active:
                continue
            latest = NetWorthService.latest_update(by_source.get(source.id, []))
            if latest is not None:
                total += _to_decimal(latest.balance)
        return total

    @staticmethod
    def calculate_current_networth(user_id):
        """
        Calculate today's net worth for *user_id*.

        Sums the latest balance of every active source.  Returns a Decimal.
        """
        sources = owned_query(FinancialSource, user_id).filter_by(is_active=True).all()
        if not sources:
            return ZERO
        updates = _load_updates([s.id for s in sources])
        return NetWorthService.sum_latest_balances(sources, updates)

    @staticmethod
    def build_history(sources, updates):
        """
        Rebuild the net worth series from *sources* and their *updates*.

        Returns a list of ``{'date', 'net_worth', 'sources'}`` dicts ordered by
        date, where ``sources`` maps source id to its latest known balance as of
        that date.  Updates whose source is not in *sources* are ignored;
        updates with an unusable date are skipped with a warning.
        """
        sources_by_id = {s.id: s for s in sources}

        by_date = {}
        for update in updates:
            if update.financial_source_id not in sources_by_id:
                continue
            try:
                observed = _observation_date(update)
            except (TypeError, ValueError):
                logger.warning(f"Invalid date format for update {update.id}: {update.date!r}; skipping")
                continue
            by_date.setdefault(observed, []).append(update)

        running = {}
        history = []
        for observed in sorted(by_date):
            # Oldest write first so the last one written that day wins
            for update in sorted(by_date[observed], key=_write_order):
                source = sources_by_id[update.financial_source_id]
                running[source.id] = {
                    'id': source.id,
                    'name': source.name,
                    'type': source.type,
                    'color_code': source.color_code,
                    'balance': _to_decimal(update.balance),
                }

            history.append({
                'date': observed,
                'net_worth': sum((entry['balance'] for entry in running.values()), ZERO),
                'sources': {sid: dict(entry) for sid, entry in running.items()},
            })

        return history

    @staticmethod
    def calculate_historical_networth(user_id, period=None, start_date=None):
        """
        Net worth on each date an update was observed since the period start.

        *start_date*, when given, overrides *period*.  Periods are 'week',
        'month', 'quarter' and 'year'; anything else means 'month'.
        """
        if start_date is None:
            start_date = resolve_period_start(period)

        sources = owned_query(FinancialSource, user_id).filter_by(is_active=True).all()
        if not sources:
            return []

        updates = _load_updates([s.id for s in sources], start_date=start_date)

        return NetWorthService.build_history(sources, updates)
