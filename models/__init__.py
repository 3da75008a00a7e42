# Models package - Import all models for Flask-SQLAlchemy

from models.users import User
from models.financial_sources import FinancialSource, FinancialSourceType
from models.financial_source_updates import FinancialSourceUpdate
from models.networth import NetWorthEvent, NetWorthEventType
