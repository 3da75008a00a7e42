import uuid
from extensions import db
from datetime import datetime, timezone


class FinancialSourceUpdate(db.Model):
    __tablename__ = 'financial_source_updates'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    financial_source_id = db.Column(db.String(36), db.ForeignKey('financial_sources.id'), nullable=False, index=True)
    balance = db.Column(db.Numeric(15, 2), nullable=False)
    notes = db.Column(db.Text)
    date = db.Column(db.Date, nullable=False)  # day the balance was observed
    # Audit only; breaks ties between updates sharing the same date
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), nullable=False)
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def to_dict(self):
        return {
            'id': self.id,
            'financial_source_id': self.financial_source_id,
            'balance': float(self.balance) if self.balance is not None else None,
            'notes': self.notes,
            'date': self.date.isoformat() if self.date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<FinancialSourceUpdate {self.financial_source_id} {self.date}: {self.balance}>'
