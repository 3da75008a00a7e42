"""
Financial source registry.

CRUD over a user's financial sources.  Every lookup is scoped to the owner;
a source that is missing or belongs to someone else raises NotFoundError.
"""
import logging
from datetime import date

from extensions import db
from models.financial_sources import FinancialSource, FinancialSourceType
from models.financial_source_updates import FinancialSourceUpdate
from models.networth import NetWorthEventType
from services.networth_event_service import NetWorthEventService
from utils.db_helpers import owned_query, owned_get_or_raise
from utils.validators import (
    INSTITUTION_MAX_LENGTH,
    clean_balance,
    clean_color_code,
    clean_name,
    clean_optional_text,
    clean_source_type,
)


logger = logging.getLogger(__name__)

INITIAL_BALANCE_NOTE = 'Initial balance'

# Fields a partial update may change, mapped to their cleaners
_UPDATABLE_FIELDS = {
    'name': clean_name,
    'type': clean_source_type,
    'institution': lambda v: clean_optional_text(v, 'Institution', INSTITUTION_MAX_LENGTH),
    'description': lambda v: clean_optional_text(v, 'Description'),
    'color_code': clean_color_code,
    'is_active': bool,
}


class FinancialSourceService:

    @staticmethod
    def list_types():
        return list(FinancialSourceType.ALL)

    @staticmethod
    def list_sources(user_id):
        """All of the user's sources by name, each with its updates newest first."""
        return owned_query(FinancialSource, user_id).order_by(FinancialSource.name.asc()).all()

    @staticmethod
    def get_source(user_id, source_id):
        return owned_get_or_raise(FinancialSource, source_id, user_id, message='Financial source not found')

    @staticmethod
    def create_source(user_id, name, type, institution=None, description=None,
                      color_code=None, initial_balance=None, notes=None):
        """
        Create a source, plus an update dated today when *initial_balance* is given.

        Both rows are committed together.
        """
        source = FinancialSource(
            user_id=user_id,
            name=clean_name(name),
            type=clean_source_type(type),
            institution=clean_optional_text(institution, 'Institution', INSTITUTION_MAX_LENGTH),
            description=clean_optional_text(description, 'Description'),
            color_code=clean_color_code(color_code),
            is_active=True,
        )
        opening = None
        if initial_balance is not None:
            opening = FinancialSourceUpdate(
                balance=clean_balance(initial_balance),
                notes=clean_optional_text(notes, 'Notes') or INITIAL_BALANCE_NOTE,
                date=date.today(),
            )

        try:
            db.session.add(source)
            db.session.flush()
            if opening is not None:
                opening.financial_source_id = source.id
                db.session.add(opening)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"user {user_id}: created financial source {source.id} ({source.type})")
        NetWorthEventService.record_snapshot_safely(user_id, NetWorthEventType.FINANCIAL_SOURCE_ADDED)
        return source

    @staticmethod
    def update_source(user_id, source_id, **fields):
        """Change only the supplied fields; everything else keeps its value."""
        source = FinancialSourceService.get_source(user_id, source_id)

        unknown = set(fields) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise TypeError(f"update_source() got unexpected fields: {', '.join(sorted(unknown))}")

        for field, value in fields.items():
            setattr(source, field, _UPDATABLE_FIELDS[field](value))

        db.session.commit()
        return source

    @staticmethod
    def delete_source(user_id, source_id):
        """Delete the source's updates, then the source, in one commit."""
        source = FinancialSourceService.get_source(user_id, source_id)

        try:
            deleted = FinancialSourceUpdate.query.filter_by(financial_source_id=source.id).delete()
            db.session.expire(source, ['updates'])
            db.session.delete(source)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"user {user_id}: deleted financial source {source_id} and {deleted} updates")
        NetWorthEventService.record_snapshot_safely(user_id, NetWorthEventType.FINANCIAL_SOURCE_DELETED)
