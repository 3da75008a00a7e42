"""
HTTP tests for the JSON API: envelope, authentication and the main flows.

``client`` is logged in as ``user``; ``anon`` has no session.
"""
from datetime import date

import pytest

from models.networth import NetWorthEvent


@pytest.fixture
def anon(app):
    return app.test_client()


def _create_source(client, **overrides):
    body = {'name': 'Equity Bank', 'type': 'BANK_ACCOUNT', 'initialBalance': 100}
    body.update(overrides)
    return client.post('/api/financial-sources', json=body)


class TestEnvelope:
    def test_health(self, anon):
        resp = anon.get('/health')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'success'

    @pytest.mark.parametrize('url', [
        '/api/financial-sources',
        '/api/financial-sources/net-worth',
        '/api/financial-sources/some-id/updates',
        '/api/net-worth-events',
        '/api/auth/me',
    ])
    def test_protected_routes_require_login(self, anon, url):
        resp = anon.get(url)
        assert resp.status_code == 401
        assert resp.get_json()['status'] == 'fail'

    def test_unknown_route_is_json_404(self, client):
        resp = client.get('/api/nothing-here')
        assert resp.status_code == 404
        assert resp.get_json()['status'] == 'fail'

    def test_security_headers_applied(self, anon):
        resp = anon.get('/health')
        assert resp.headers['X-Content-Type-Options'] == 'nosniff'


class TestFinancialSourcesApi:
    def test_types(self, client):
        resp = client.get('/api/financial-sources/types')
        assert 'MPESA' in resp.get_json()['data']['types']

    def test_create_list_and_net_worth(self, client, user):
        resp = _create_source(client, colorCode='#a1b2c3')
        assert resp.status_code == 201
        created = resp.get_json()['data']['financialSource']
        assert created['color_code'] == '#A1B2C3'
        assert created['updates'][0]['balance'] == 100.0

        listing = client.get('/api/financial-sources').get_json()
        assert listing['results'] == 1
        assert listing['data']['financialSources'][0]['id'] == created['id']

        worth = client.get('/api/financial-sources/net-worth').get_json()
        assert worth['data']['netWorth'] == 100.0

        event = NetWorthEvent.query.filter_by(user_id=user.id).one()
        assert event.event_type == 'FINANCIAL_SOURCE_ADDED'

    @pytest.mark.parametrize('body', [
        {'type': 'CASH'},
        {'name': 'Wallet', 'type': 'GOLD'},
        {'name': 'Wallet', 'type': 'CASH', 'colorCode': 'blue'},
        {'name': 'Wallet', 'type': 'CASH', 'initialBalance': -5},
    ])
    def test_create_rejects_bad_input(self, client, body):
        resp = client.post('/api/financial-sources', json=body)
        assert resp.status_code == 400
        payload = resp.get_json()
        assert payload['status'] == 'fail'
        assert payload['message'].startswith('Validation error')

    def test_zero_initial_balance_is_accepted(self, client):
        resp = _create_source(client, initialBalance=0)
        assert resp.status_code == 201
        assert resp.get_json()['data']['financialSource']['updates'][0]['balance'] == 0.0

    def test_patch_changes_only_supplied_fields(self, client):
        source = _create_source(client, description='Main account').get_json()['data']['financialSource']

        resp = client.patch(f"/api/financial-sources/{source['id']}", json={'isActive': False})

        updated = resp.get_json()['data']['financialSource']
        assert updated['is_active'] is False
        assert updated['description'] == 'Main account'
        assert updated['name'] == 'Equity Bank'

        worth = client.get('/api/financial-sources/net-worth').get_json()
        assert worth['data']['netWorth'] == 0.0

    def test_delete(self, client):
        source = _create_source(client).get_json()['data']['financialSource']

        assert client.delete(f"/api/financial-sources/{source['id']}").status_code == 204
        assert client.get(f"/api/financial-sources/{source['id']}").status_code == 404

    def test_other_users_source_is_not_found(self, client, other_user, make_source):
        theirs = make_source(other_user)

        assert client.get(f'/api/financial-sources/{theirs.id}').status_code == 404
        assert client.patch(f'/api/financial-sources/{theirs.id}', json={'name': 'x'}).status_code == 404
        assert client.delete(f'/api/financial-sources/{theirs.id}').status_code == 404
        assert client.get(f'/api/financial-sources/{theirs.id}/updates').status_code == 404


class TestBalanceUpdatesApi:
    def test_record_and_list_updates(self, client, user):
        source = _create_source(client).get_json()['data']['financialSource']
        url = f"/api/financial-sources/{source['id']}/updates"

        resp = client.post(url, json={'balance': 250.5, 'notes': 'Salary', 'date': '2030-01-01'})

        assert resp.status_code == 201
        update = resp.get_json()['data']['update']
        assert update['balance'] == 250.5
        assert update['date'] == '2030-01-01'

        listing = client.get(url).get_json()
        assert listing['results'] == 2
        assert listing['data']['updates'][0]['id'] == update['id']

        types = [e.event_type for e in NetWorthEvent.query.filter_by(user_id=user.id).all()]
        assert 'BALANCE_UPDATE' in types

    def test_missing_balance_is_rejected(self, client):
        source = _create_source(client).get_json()['data']['financialSource']
        resp = client.post(f"/api/financial-sources/{source['id']}/updates", json={'notes': 'no amount'})
        assert resp.status_code == 400

    def test_edit_and_delete_update(self, client):
        source = _create_source(client).get_json()['data']['financialSource']
        url = f"/api/financial-sources/{source['id']}/updates"
        update_id = source['updates'][0]['id']

        resp = client.patch(f'{url}/{update_id}', json={'balance': 80})
        assert resp.get_json()['data']['update']['balance'] == 80.0
        assert resp.get_json()['data']['update']['notes'] == 'Initial balance'

        assert client.delete(f'{url}/{update_id}').status_code == 204
        assert client.get(f'{url}/{update_id}').status_code == 404


class TestHistoricalNetWorthApi:
    def test_history_since_start_date(self, client, user, make_source, add_update):
        a = make_source(user, name='A')
        b = make_source(user, name='B')
        add_update(a, '100.00', date(2024, 1, 1))
        add_update(b, '50.00', date(2024, 1, 5))
        add_update(a, '150.00', date(2024, 1, 10))

        resp = client.get('/api/financial-sources/historical-net-worth?startDate=2024-01-01')

        history = resp.get_json()['data']['historicalData']
        assert [h['date'] for h in history] == ['2024-01-01', '2024-01-05', '2024-01-10']
        assert [h['netWorth'] for h in history] == [100.0, 150.0, 200.0]
        assert history[2]['sources'][b.id]['balance'] == 50.0

    def test_bad_start_date_is_rejected(self, client):
        resp = client.get('/api/financial-sources/historical-net-worth?startDate=yesterday')
        assert resp.status_code == 400


class TestNetWorthEventsApi:
    def test_snapshot_latest_list_and_delete(self, client, user, make_source, add_update):
        source = make_source(user)
        add_update(source, '42.00', date(2024, 1, 1))

        resp = client.post('/api/net-worth-events', json={'eventDate': '2024-02-01T10:00:00'})
        assert resp.status_code == 201
        event = resp.get_json()['data']['netWorthEvent']
        assert event['net_worth'] == 42.0
        assert event['event_type'] == 'MANUAL'

        assert client.get('/api/net-worth-events/latest').get_json()['data']['netWorth'] == 42.0

        listing = client.get('/api/net-worth-events?period=all').get_json()
        assert listing['results'] == 1

        assert client.delete(f"/api/net-worth-events/{event['id']}").status_code == 204
        assert client.get(f"/api/net-worth-events/{event['id']}").status_code == 404

    def test_invalid_event_type_is_rejected(self, client):
        resp = client.post('/api/net-worth-events', json={'eventType': 'BONUS'})
        assert resp.status_code == 400

    def test_latest_bootstraps_a_manual_event(self, client, user):
        resp = client.get('/api/net-worth-events/latest')

        assert resp.get_json()['data']['netWorth'] == 0.0
        assert NetWorthEvent.query.filter_by(user_id=user.id, event_type='MANUAL').count() == 1


class TestAuthApi:
    def test_register_logs_in(self, anon):
        resp = anon.post('/api/auth/register', json={
            'name': 'Jane', 'email': 'jane@example.com',
            'password': 'GoodPass123', 'passwordConfirm': 'GoodPass123',
        })
        assert resp.status_code == 201

        me = anon.get('/api/auth/me').get_json()
        assert me['data']['user']['email'] == 'jane@example.com'

    def test_register_password_mismatch(self, anon):
        resp = anon.post('/api/auth/register', json={
            'name': 'Jane', 'email': 'jane@example.com',
            'password': 'GoodPass123', 'passwordConfirm': 'Different123',
        })
        assert resp.status_code == 400

    def test_register_duplicate_email(self, anon, user):
        resp = anon.post('/api/auth/register', json={
            'name': 'Again', 'email': 'owner@example.com',
            'password': 'GoodPass123', 'passwordConfirm': 'GoodPass123',
        })
        assert resp.status_code == 409

    def test_login_and_logout(self, anon, user):
        bad = anon.post('/api/auth/login', json={'email': 'owner@example.com', 'password': 'wrong'})
        assert bad.status_code == 401
        assert bad.get_json()['message'] == 'Incorrect email or password'

        ok = anon.post('/api/auth/login', json={'email': 'owner@example.com', 'password': 'TestPass1!'})
        assert ok.status_code == 200
        assert anon.get('/api/auth/me').status_code == 200

        anon.post('/api/auth/logout')
        assert anon.get('/api/auth/me').status_code == 401


class TestNullFields:
    """A JSON null is the same as leaving the key out."""

    def test_null_initial_balance_creates_source_without_updates(self, client):
        resp = _create_source(client, initialBalance=None)

        assert resp.status_code == 201
        assert resp.get_json()['data']['financialSource']['updates'] == []

    def test_null_balance_is_a_missing_balance(self, client):
        source = _create_source(client).get_json()['data']['financialSource']

        resp = client.post(f"/api/financial-sources/{source['id']}/updates", json={'balance': None})

        assert resp.status_code == 400
        assert resp.get_json()['message'] == 'Balance is required'

    def test_null_date_defaults_to_today(self, client):
        source = _create_source(client).get_json()['data']['financialSource']

        resp = client.post(f"/api/financial-sources/{source['id']}/updates", json={'balance': 5, 'date': None})

        assert resp.status_code == 201
        assert resp.get_json()['data']['update']['date'] == date.today().isoformat()

    def test_null_fields_on_update_edit_keep_stored_values(self, client):
        source = _create_source(client).get_json()['data']['financialSource']
        url = f"/api/financial-sources/{source['id']}/updates/{source['updates'][0]['id']}"

        resp = client.patch(url, json={'balance': None, 'date': None, 'notes': 'checked'})

        assert resp.status_code == 200
        update = resp.get_json()['data']['update']
        assert update['balance'] == 100.0
        assert update['date'] == date.today().isoformat()
        assert update['notes'] == 'checked'

    def test_null_is_active_does_not_reactivate(self, client):
        source = _create_source(client).get_json()['data']['financialSource']
        url = f"/api/financial-sources/{source['id']}"
        client.patch(url, json={'isActive': False})

        resp = client.patch(url, json={'isActive': None, 'name': None})

        assert resp.status_code == 200
        updated = resp.get_json()['data']['financialSource']
        assert updated['is_active'] is False
        assert updated['name'] == 'Equity Bank'
        assert client.get('/api/financial-sources/net-worth').get_json()['data']['netWorth'] == 0.0
