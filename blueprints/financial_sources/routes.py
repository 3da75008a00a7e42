from flask import request, current_app
from . import financial_sources_bp
from .forms import FinancialSourceForm, FinancialSourceUpdateForm
from services.financial_source_service import FinancialSourceService
from services.networth_service import NetWorthService
from utils.db_helpers import get_user_id
from utils.periods import parse_date
from utils.responses import success, no_content, validate_form, supplied_fields


def _history_entry(entry):
    return {
        'date': entry['date'].isoformat(),
        'netWorth': float(entry['net_worth']),
        'sources': {
            source_id: {**source, 'balance': float(source['balance'])}
            for source_id, source in entry['sources'].items()
        },
    }


@financial_sources_bp.route('/types', methods=['GET'])
def types():
    return success({'types': FinancialSourceService.list_types()})


@financial_sources_bp.route('/net-worth', methods=['GET'])
def net_worth():
    """Current net worth from the latest balance of each active source"""
    value = NetWorthService.calculate_current_networth(get_user_id())
    return success({'netWorth': float(value)})


@financial_sources_bp.route('/historical-net-worth', methods=['GET'])
def historical_net_worth():
    """Net worth per observed date; ?period=week|month|quarter|year or ?startDate=YYYY-MM-DD"""
    period = request.args.get('period') or current_app.config.get('NETWORTH_DEFAULT_PERIOD')
    start_date = parse_date(request.args.get('startDate'), 'startDate')

    history = NetWorthService.calculate_historical_networth(get_user_id(), period=period, start_date=start_date)
    return success({'historicalData': [_history_entry(e) for e in history]})


@financial_sources_bp.route('', methods=['GET'])
@financial_sources_bp.route('/', methods=['GET'])
def index():
    sources = FinancialSourceService.list_sources(get_user_id())
    return success({'financialSources': [s.to_dict() for s in sources]}, results=len(sources))


@financial_sources_bp.route('', methods=['POST'])
@financial_sources_bp.route('/', methods=['POST'])
def create():
    form = validate_form(FinancialSourceForm())
    source = FinancialSourceService.create_source(
        get_user_id(),
        name=form.name.data,
        type=form.type.data,
        institution=form.institution.data,
        description=form.description.data,
        color_code=form.color_code.data,
        initial_balance=form.initial_balance.data,
        notes=form.notes.data,
    )
    return success({'financialSource': source.to_dict()}, 201)


@financial_sources_bp.route('/<string:source_id>', methods=['GET'])
def detail(source_id):
    source = FinancialSourceService.get_source(get_user_id(), source_id)
    return success({'financialSource': source.to_dict()})


@financial_sources_bp.route('/<string:source_id>', methods=['PATCH'])
def edit(source_id):
    form = validate_form(FinancialSourceUpdateForm())
    fields = supplied_fields(form, {
        'name': 'name',
        'type': 'type',
        'institution': 'institution',
        'description': 'description',
        'color_code': 'color_code',
        'is_active': 'is_active',
    })
    source = FinancialSourceService.update_source(get_user_id(), source_id, **fields)
    return success({'financialSource': source.to_dict()})


@financial_sources_bp.route('/<string:source_id>', methods=['DELETE'])
def delete(source_id):
    FinancialSourceService.delete_source(get_user_id(), source_id)
    return no_content()
