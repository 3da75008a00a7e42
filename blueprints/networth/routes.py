from flask import request, current_app
from . import networth_bp
from .forms import NetWorthSnapshotForm
from models.networth import NetWorthEventType
from services.networth_event_service import NetWorthEventService
from utils.db_helpers import get_user_id
from utils.responses import success, no_content, validate_form


@networth_bp.route('', methods=['GET'])
@networth_bp.route('/', methods=['GET'])
def index():
    """Net worth events, oldest first; ?period=all|week|month|quarter|year&limit=N"""
    period = request.args.get('period', 'all')
    default_limit = current_app.config.get('NETWORTH_EVENTS_DEFAULT_LIMIT', 100)
    max_limit = current_app.config.get('NETWORTH_EVENTS_MAX_LIMIT', 1000)
    limit = request.args.get('limit', type=int, default=default_limit)
    limit = max(1, min(limit, max_limit))

    events = NetWorthEventService.list_events(get_user_id(), period=period, limit=limit)
    return success({'netWorthEvents': [e.to_dict() for e in events]}, results=len(events))


@networth_bp.route('', methods=['POST'])
@networth_bp.route('/', methods=['POST'])
def create_snapshot():
    """Record the current net worth as an event"""
    form = validate_form(NetWorthSnapshotForm())
    event = NetWorthEventService.record_snapshot(
        get_user_id(),
        event_type=form.event_type.data or NetWorthEventType.MANUAL,
        event_date=form.event_date.data,
    )
    return success({'netWorthEvent': event.to_dict()}, 201)


@networth_bp.route('/latest', methods=['GET'])
def latest():
    value = NetWorthEventService.latest_networth(get_user_id())
    return success({'netWorth': float(value)})


@networth_bp.route('/<string:event_id>', methods=['GET'])
def detail(event_id):
    event = NetWorthEventService.get_event(get_user_id(), event_id)
    return success({'netWorthEvent': event.to_dict()})


@networth_bp.route('/<string:event_id>', methods=['DELETE'])
def delete(event_id):
    NetWorthEventService.delete_event(get_user_id(), event_id)
    return no_content()
