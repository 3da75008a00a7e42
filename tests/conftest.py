"""
Shared pytest fixtures for the net worth tracker test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.
"""
from datetime import datetime
from decimal import Decimal

import pytest
from flask import g
from flask_login import FlaskLoginClient

from app import create_app
from extensions import db as _db


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    application.test_client_class = FlaskLoginClient
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    # The session-wide app context keeps flask_login's cached user on g
    g.pop('_login_user', None)
    yield
    g.pop('_login_user', None)
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

def _make_user(email, name):
    from models.users import User
    from services.auth_service import AuthService
    u = User(email=email, name=name, is_active=True)
    AuthService.set_password(u, 'TestPass1!')
    _db.session.add(u)
    _db.session.commit()
    return u


@pytest.fixture
def user(app):
    return _make_user('owner@example.com', 'Source Owner')


@pytest.fixture
def other_user(app):
    return _make_user('other@example.com', 'Someone Else')


@pytest.fixture
def client(app, user):
    """Test client logged in as ``user``."""
    return app.test_client(user=user)


@pytest.fixture
def make_source():
    """Insert a FinancialSource row directly (no events, no validation)."""
    from models.financial_sources import FinancialSource

    def _make(owner, name='Checking', source_type='BANK_ACCOUNT', is_active=True, color_code=None):
        s = FinancialSource(
            user_id=owner.id,
            name=name,
            type=source_type,
            is_active=is_active,
            color_code=color_code,
        )
        _db.session.add(s)
        _db.session.commit()
        return s
    return _make


@pytest.fixture
def add_update():
    """Insert a FinancialSourceUpdate row with an optional explicit created_at."""
    from models.financial_source_updates import FinancialSourceUpdate

    def _add(source, balance, on, created_at=None, notes=None):
        u = FinancialSourceUpdate(
            financial_source_id=source.id,
            balance=Decimal(str(balance)),
            date=on,
            notes=notes,
            created_at=created_at or datetime(on.year, on.month, on.day, 12, 0, 0),
        )
        _db.session.add(u)
        _db.session.commit()
        return u
    return _add
