from . import source_updates_bp
from blueprints.financial_sources.forms import BalanceUpdateForm, BalanceUpdateEditForm
from services.source_update_service import SourceUpdateService
from utils.db_helpers import get_user_id
from utils.responses import success, no_content, validate_form, supplied_fields


@source_updates_bp.route('', methods=['GET'])
@source_updates_bp.route('/', methods=['GET'])
def index(source_id):
    updates = SourceUpdateService.list_updates(get_user_id(), source_id)
    return success({'updates': [u.to_dict() for u in updates]}, results=len(updates))


@source_updates_bp.route('', methods=['POST'])
@source_updates_bp.route('/', methods=['POST'])
def create(source_id):
    """Record a balance; a BALANCE_UPDATE net worth event is logged alongside"""
    form = validate_form(BalanceUpdateForm())
    update = SourceUpdateService.create_update(
        get_user_id(),
        source_id,
        balance=form.balance.data,
        notes=form.notes.data,
        update_date=form.date.data,
    )
    return success({'update': update.to_dict()}, 201)


@source_updates_bp.route('/<string:update_id>', methods=['GET'])
def detail(source_id, update_id):
    update = SourceUpdateService.get_update(get_user_id(), source_id, update_id)
    return success({'update': update.to_dict()})


@source_updates_bp.route('/<string:update_id>', methods=['PATCH'])
def edit(source_id, update_id):
    form = validate_form(BalanceUpdateEditForm())
    fields = supplied_fields(form, {'balance': 'balance', 'notes': 'notes', 'date': 'date'})
    update = SourceUpdateService.update_update(get_user_id(), source_id, update_id, **fields)
    return success({'update': update.to_dict()})


@source_updates_bp.route('/<string:update_id>', methods=['DELETE'])
def delete(source_id, update_id):
    SourceUpdateService.delete_update(get_user_id(), source_id, update_id)
    return no_content()
