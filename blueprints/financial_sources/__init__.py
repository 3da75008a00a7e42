from flask import Blueprint
from flask_login import login_required

financial_sources_bp = Blueprint('financial_sources', __name__, url_prefix='/api/financial-sources')

# Require authentication for all routes in this blueprint
@financial_sources_bp.before_request
@login_required
def require_login():
    pass

from . import routes
