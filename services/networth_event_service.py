"""
Net worth event log.

Events are persisted snapshots of a user's net worth: an audit trail of when
and why it was recorded, and a cache so the latest figure can be read without
recomputing it.  Events are append-only; they are never edited, only deleted.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal

from extensions import db
from models.networth import NetWorthEvent, NetWorthEventType
from services.networth_service import NetWorthService
from utils.db_helpers import owned_query, owned_get_or_raise
from utils.errors import ValidationFailedError
from utils.periods import ALL_PERIODS, resolve_period_start


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class NetWorthEventService:

    @staticmethod
    def record_event(user_id, net_worth, event_type=NetWorthEventType.MANUAL, event_date=None):
        """Append a net worth event and commit it."""
        if event_type not in NetWorthEventType.ALL:
            raise ValidationFailedError(f'Invalid event type: {event_type}')

        event = NetWorthEvent(
            user_id=user_id,
            net_worth=Decimal(str(net_worth)).quantize(Decimal('0.01')),
            event_type=event_type,
            event_date=event_date or _utcnow(),
        )
        db.session.add(event)
        db.session.commit()
        logger.info(f"user {user_id}: recorded {event_type} net worth event {event.net_worth}")
        return event

    @staticmethod
    def record_snapshot(user_id, event_type=NetWorthEventType.MANUAL, event_date=None):
        """Compute the current net worth and store it as an event."""
        net_worth = NetWorthService.calculate_current_networth(user_id)
        return NetWorthEventService.record_event(user_id, net_worth, event_type, event_date)

    @staticmethod
    def record_snapshot_safely(user_id, event_type):
        """
        Best-effort ``record_snapshot`` used after a primary write.

        The primary write has already been committed; a failure here is rolled
        back and logged, never raised.  Returns the event or None.
        """
        try:
            return NetWorthEventService.record_snapshot(user_id, event_type)
        except Exception:
            db.session.rollback()
            logger.exception(f"user {user_id}: failed to record {event_type} net worth event")
            return None

    @staticmethod
    def latest_networth(user_id):
        """
        Net worth from the most recent event.

        With no events yet, the current net worth is calculated and stored as
        a MANUAL event so later reads hit the log.
        """
        latest = owned_query(NetWorthEvent, user_id).order_by(
            NetWorthEvent.event_date.desc(),
            NetWorthEvent.created_at.desc()
        ).first()
        if latest is not None:
            return Decimal(latest.net_worth)

        event = NetWorthEventService.record_snapshot(user_id, NetWorthEventType.MANUAL)
        return Decimal(event.net_worth)

    @staticmethod
    def list_events(user_id, period=None, limit=DEFAULT_LIMIT):
        """Events in ascending date order, optionally since a period start."""
        query = owned_query(NetWorthEvent, user_id)
        if period and period != ALL_PERIODS:
            query = query.filter(NetWorthEvent.event_date >= resolve_period_start(period, now=_utcnow()))
        return query.order_by(
            NetWorthEvent.event_date.asc(),
            NetWorthEvent.created_at.asc()
        ).limit(limit).all()

    @staticmethod
    def get_event(user_id, event_id):
        return owned_get_or_raise(NetWorthEvent, event_id, user_id, message='Net worth event not found')

    @staticmethod
    def delete_event(user_id, event_id):
        event = owned_get_or_raise(NetWorthEvent, event_id, user_id, message='Net worth event not found')
        db.session.delete(event)
        db.session.commit()
