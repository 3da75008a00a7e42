import uuid
from extensions import db
from datetime import datetime, timezone


class NetWorthEventType:
    BALANCE_UPDATE = 'BALANCE_UPDATE'
    FINANCIAL_SOURCE_ADDED = 'FINANCIAL_SOURCE_ADDED'
    FINANCIAL_SOURCE_DELETED = 'FINANCIAL_SOURCE_DELETED'
    MANUAL = 'MANUAL'

    ALL = [BALANCE_UPDATE, FINANCIAL_SOURCE_ADDED, FINANCIAL_SOURCE_DELETED, MANUAL]


class NetWorthEvent(db.Model):
    """Persisted net worth snapshot.  Written once, never edited, only deleted."""
    __tablename__ = 'net_worth_events'
    __table_args__ = (
        db.Index('idx_net_worth_events_user_date', 'user_id', 'event_date'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    net_worth = db.Column(db.Numeric(15, 2), nullable=False)
    event_type = db.Column(db.String(30), nullable=False)
    event_date = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'net_worth': float(self.net_worth),
            'event_type': self.event_type,
            'event_date': self.event_date.isoformat() if self.event_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<NetWorthEvent {self.event_type} {self.event_date}: {self.net_worth}>'
