"""
Database query helpers for per-user data ownership.

Every row in this application belongs to exactly one user, either directly
(``user_id`` column) or through its financial source.  Queries against owned
models should go through these helpers so one user can never read or change
another user's records.

Usage
-----
In a blueprint route::

    from utils.db_helpers import get_user_id

    sources = FinancialSourceService.list_sources(get_user_id())

In a service::

    source = owned_get_or_raise(FinancialSource, source_id, user_id,
                                message='Financial source not found')
"""

from flask_login import current_user

from utils.errors import NotFoundError


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------

def get_user_id():
    """Return ``current_user.id``, or ``None`` if not authenticated."""
    if current_user.is_authenticated:
        return current_user.id
    return None


def owned_query(model, user_id):
    """Return a query on *model* pre-filtered to rows owned by *user_id*.

    Examples::

        owned_query(FinancialSource, user_id).filter_by(is_active=True).all()
        owned_query(NetWorthEvent, user_id).count()
    """
    if not hasattr(model, 'user_id'):
        raise AttributeError(
            f"owned_query() called on {model.__name__} but it has no user_id column."
        )
    if user_id is None:
        # Return a query that always yields zero rows rather than leaking data
        return model.query.filter(model.id.is_(None))
    return model.query.filter_by(user_id=user_id)


def owned_get(model, record_id, user_id):
    """Fetch a single record by *record_id* scoped to *user_id*.

    Returns ``None`` if the record does not exist or belongs to another user.
    """
    if user_id is None or record_id is None:
        return None
    return model.query.filter_by(id=record_id, user_id=user_id).first()


def owned_get_or_raise(model, record_id, user_id, message=None):
    """Like ``owned_get`` but raises ``NotFoundError`` if nothing is found."""
    record = owned_get(model, record_id, user_id)
    if record is None:
        raise NotFoundError(message)
    return record
