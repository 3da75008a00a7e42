import uuid
from extensions import db
from datetime import datetime, timezone


class FinancialSourceType:
    """Closed list of source types accepted by the API and shown to clients."""
    BANK_ACCOUNT = 'BANK_ACCOUNT'
    MONEY_MARKET = 'MONEY_MARKET'
    STOCKS = 'STOCKS'
    MPESA = 'MPESA'
    SACCO = 'SACCO'
    CASH = 'CASH'
    OTHER = 'OTHER'

    ALL = [BANK_ACCOUNT, MONEY_MARKET, STOCKS, MPESA, SACCO, CASH, OTHER]


class FinancialSource(db.Model):
    __tablename__ = 'financial_sources'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(20), nullable=False)  # one of FinancialSourceType.ALL
    institution = db.Column(db.String(100))
    description = db.Column(db.Text)
    color_code = db.Column(db.String(7))  # #RRGGBB
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Newest observation first; ties broken by newest write
    updates = db.relationship(
        'FinancialSourceUpdate',
        backref='source',
        lazy=True,
        order_by='(FinancialSourceUpdate.date.desc(), FinancialSourceUpdate.created_at.desc())'
    )

    def to_dict(self, include_updates=True):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'type': self.type,
            'institution': self.institution,
            'description': self.description,
            'color_code': self.color_code,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_updates:
            data['updates'] = [u.to_dict() for u in self.updates]
        return data

    def __repr__(self):
        return f'<FinancialSource {self.name} ({self.type})>'
