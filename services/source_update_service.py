"""
Balance update ledger.

Dated balance observations recorded against a financial source.  Every call
first confirms the source belongs to the user, then that the update belongs
to the source; either miss raises NotFoundError.
"""
import logging
from datetime import date

from extensions import db
from models.financial_source_updates import FinancialSourceUpdate
from models.networth import NetWorthEventType
from services.financial_source_service import FinancialSourceService
from services.networth_event_service import NetWorthEventService
from utils.errors import NotFoundError
from utils.periods import parse_date
from utils.validators import clean_balance, clean_optional_text


logger = logging.getLogger(__name__)


class SourceUpdateService:

    @staticmethod
    def list_updates(user_id, source_id):
        source = FinancialSourceService.get_source(user_id, source_id)
        return FinancialSourceUpdate.query.filter_by(
            financial_source_id=source.id
        ).order_by(
            FinancialSourceUpdate.date.desc(),
            FinancialSourceUpdate.created_at.desc()
        ).all()

    @staticmethod
    def get_update(user_id, source_id, update_id):
        source = FinancialSourceService.get_source(user_id, source_id)
        update = FinancialSourceUpdate.query.filter_by(
            id=update_id,
            financial_source_id=source.id
        ).first()
        if update is None:
            raise NotFoundError('Update not found')
        return update

    @staticmethod
    def create_update(user_id, source_id, balance, notes=None, update_date=None):
        """
        Record a balance observation, then snapshot the user's net worth.

        The snapshot is best-effort: if it fails the update is still returned.
        """
        source = FinancialSourceService.get_source(user_id, source_id)

        update = FinancialSourceUpdate(
            financial_source_id=source.id,
            balance=clean_balance(balance),
            notes=clean_optional_text(notes, 'Notes'),
            date=parse_date(update_date) or date.today(),
        )
        db.session.add(update)
        db.session.commit()
        logger.info(f"source {source.id}: recorded balance {update.balance} on {update.date}")

        NetWorthEventService.record_snapshot_safely(user_id, NetWorthEventType.BALANCE_UPDATE)
        return update

    @staticmethod
    def update_update(user_id, source_id, update_id, **fields):
        """Change only the supplied fields (balance, notes, date)."""
        unknown = set(fields) - {'balance', 'notes', 'date'}
        if unknown:
            raise TypeError(f"update_update() got unexpected fields: {', '.join(sorted(unknown))}")

        update = SourceUpdateService.get_update(user_id, source_id, update_id)

        if 'balance' in fields:
            update.balance = clean_balance(fields['balance'])
        if 'notes' in fields:
            update.notes = clean_optional_text(fields['notes'], 'Notes')
        if fields.get('date'):
            update.date = parse_date(fields['date'])

        db.session.commit()
        return update

    @staticmethod
    def delete_update(user_id, source_id, update_id):
        update = SourceUpdateService.get_update(user_id, source_id, update_id)
        db.session.delete(update)
        db.session.commit()
