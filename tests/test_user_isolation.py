"""
Tests for per-user data isolation.

These are the most security-critical tests in the suite.  They verify that
owned_query() and owned_get() never leak one user's data to another, and
that an anonymous caller (user_id None) yields zero rows.
"""
import pytest

from models.financial_sources import FinancialSource
from models.financial_source_updates import FinancialSourceUpdate
from utils.db_helpers import owned_query, owned_get, owned_get_or_raise
from utils.errors import NotFoundError


class TestOwnedQueryIsolation:
    def test_query_returns_own_records_only(self, app, user, other_user, make_source):
        make_source(user, name='My Savings')
        make_source(other_user, name='Their Savings')

        names = {s.name for s in owned_query(FinancialSource, user.id).all()}

        assert 'My Savings' in names
        assert 'Their Savings' not in names, \
            "owned_query must not return another user's records"

    def test_query_excludes_all_records_when_anonymous(self, app, user, make_source):
        make_source(user)

        assert owned_query(FinancialSource, None).all() == [], \
            "Anonymous caller must see zero records"

    def test_model_without_owner_column_is_rejected(self, app):
        with pytest.raises(AttributeError):
            owned_query(FinancialSourceUpdate, 'anyone')


class TestOwnedGetIsolation:
    def test_returns_own_record(self, app, user, make_source):
        source = make_source(user)

        result = owned_get(FinancialSource, source.id, user.id)

        assert result is not None
        assert result.id == source.id

    def test_returns_none_for_other_users_record(self, app, user, other_user, make_source):
        theirs = make_source(other_user, name='Private')

        assert owned_get(FinancialSource, theirs.id, user.id) is None, \
            "owned_get must return None when the record belongs to a different user"

    def test_returns_none_when_anonymous(self, app, user, make_source):
        source = make_source(user)
        assert owned_get(FinancialSource, source.id, None) is None

    def test_or_raise_uses_given_message(self, app, user, other_user, make_source):
        theirs = make_source(other_user)

        with pytest.raises(NotFoundError) as excinfo:
            owned_get_or_raise(FinancialSource, theirs.id, user.id, message='Financial source not found')

        assert excinfo.value.message == 'Financial source not found'
        assert excinfo.value.status_code == 404
