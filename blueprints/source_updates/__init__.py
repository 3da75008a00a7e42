from flask import Blueprint
from flask_login import login_required

source_updates_bp = Blueprint(
    'source_updates', __name__,
    url_prefix='/api/financial-sources/<string:source_id>/updates'
)

# Require authentication for all routes in this blueprint
@source_updates_bp.before_request
@login_required
def require_login():
    pass

from . import routes
