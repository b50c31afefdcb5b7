from io import BytesIO

from openpyxl import load_workbook

from ganaderos.core.deps import get_record_store
from ganaderos.main import app


def _create_record(client, headers, **overrides):
    payload = {
        'member': 'Socio A',
        'date': '2024-01-10',
        'entries': 50,
        'exits': 10,
        'total_kg': 200,
        'price_per_kg': 5,
    }
    payload.update(overrides)
    r = client.post('/movement-records', json=payload, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}


def test_register_login_and_refresh(client):
    r = client.post('/auth/register', json={'email': 'socio@ganaderos.com', 'password': 'secret123'})
    assert r.status_code == 200
    tokens = r.json()
    assert 'access_token' in tokens

    r = client.post('/auth/login', json={'email': 'socio@ganaderos.com', 'password': 'wrong-pass'})
    assert r.status_code == 401

    r = client.post('/auth/refresh', json={'refresh_token': tokens['refresh_token']})
    assert r.status_code == 200

    r = client.post('/auth/refresh', json={'refresh_token': tokens['access_token']})
    assert r.status_code == 401


def test_routes_require_token(client):
    assert client.get('/reports/sales').status_code == 401
    assert client.get('/movement-records').status_code == 401


def test_operator_cannot_write(client, operator_headers):
    r = client.post('/movement-records', json={'member': 'A', 'date': '2024-01-10'}, headers=operator_headers)
    assert r.status_code == 403


def test_record_defaults_balance_and_total(client, admin_headers):
    record = _create_record(client, admin_headers)

    assert record['balance'] == 40
    assert record['total'] == 1000


def test_sales_report_end_to_end(client, admin_headers, operator_headers):
    record = _create_record(client, admin_headers)
    r = client.post(f"/movement-records/{record['id']}/exit-details", json=[
        {'cause': 'sale', 'quantity': 10, 'price_per_kg': 5, 'total_kg': 200},
    ], headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()[0]['notes'] == 'venta'

    r = client.get('/reports/sales', headers=operator_headers)
    assert r.status_code == 200
    body = r.json()
    assert body['total_rows'] == 1
    assert body['dropped_count'] == 0
    row = body['rows'][0]
    assert row['date'] == '2024-01-10'
    assert row['cumulative_inflow'] == 50
    assert row['sale_quantity'] == 10
    assert row['pct_major'] == 600
    assert row['pct_minor'] == 400
    assert row['current_inventory'] == 40


def test_exit_details_must_match_exits(client, admin_headers):
    record = _create_record(client, admin_headers)

    r = client.post(f"/movement-records/{record['id']}/exit-details", json=[
        {'cause': 'sale', 'quantity': 6, 'price_per_kg': 5, 'total_kg': 120},
        {'cause': 'death', 'quantity': 2},
    ], headers=admin_headers)

    assert r.status_code == 400
    assert r.json()['detail'] == 'La cantidad asignada (8) debe ser igual al total de salidas (10)'


def test_exit_details_only_once(client, admin_headers):
    record = _create_record(client, admin_headers, exits=0)
    url = f"/movement-records/{record['id']}/exit-details"

    assert client.post(url, json=[], headers=admin_headers).status_code == 200
    assert client.post(url, json=[], headers=admin_headers).status_code == 400
    assert len(client.get(url, headers=admin_headers).json()) == 1


def test_member_filter_and_members_list(client, admin_headers):
    for member in ('Socio A', 'Socio B'):
        record = _create_record(client, admin_headers, member=member, exits=1)
        r = client.post(f"/movement-records/{record['id']}/exit-details", json=[
            {'cause': 'sale', 'quantity': 1, 'price_per_kg': 5, 'total_kg': 200},
        ], headers=admin_headers)
        assert r.status_code == 200

    assert client.get('/movement-records/members', headers=admin_headers).json() == ['Socio A', 'Socio B']

    body = client.get('/reports/sales', params={'member': 'Socio A'}, headers=admin_headers).json()
    assert body['member'] == 'Socio A'
    assert [row['member'] for row in body['rows']] == ['Socio A']


def test_update_and_delete_record(client, admin_headers):
    record = _create_record(client, admin_headers)
    url = f"/movement-records/{record['id']}"

    r = client.put(url, json={'entries': 60}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()['balance'] == 50

    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.get('/movement-records', headers=admin_headers).json() == []
    assert client.delete(url, headers=admin_headers).status_code == 404


def test_update_keeps_stored_total_and_balance(client, admin_headers):
    record = _create_record(client, admin_headers, total=1500, balance=7)
    url = f"/movement-records/{record['id']}"

    r = client.put(url, json={'freight_cost': 10}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()['total'] == 1500
    assert r.json()['balance'] == 7

    # Changing the inputs recomputes what was not sent
    r = client.put(url, json={'price_per_kg': 6, 'exits': 5}, headers=admin_headers)
    assert r.json()['total'] == 1200
    assert r.json()['balance'] == 45


def test_fetch_failure_returns_single_error(client, operator_headers):
    class BrokenStore:
        def list_movement_records(self):
            raise ConnectionError('backend down')

        def list_exit_details(self, cause=None):
            return []

    app.dependency_overrides[get_record_store] = lambda: BrokenStore()
    try:
        r = client.get('/reports/sales', headers=operator_headers)
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 503
    assert r.json()['detail'] == 'Error al cargar los datos de ventas'


def test_export_sales_report(client, admin_headers):
    record = _create_record(client, admin_headers, total_kg=4200, price_per_kg=8500)
    client.post(f"/movement-records/{record['id']}/exit-details", json=[
        {'cause': 'sale', 'quantity': 10, 'price_per_kg': 8500, 'total_kg': 4200},
    ], headers=admin_headers)

    r = client.get('/reports/sales/export', headers=admin_headers)
    assert r.status_code == 200
    assert 'ventas.xlsx' in r.headers['content-disposition']

    sheet = load_workbook(BytesIO(r.content))['Ventas']
    header = [cell.value for cell in sheet[1]]
    values = [cell.value for cell in sheet[2]]
    assert header[0] == 'Fecha Venta'
    assert values[0] == '10/1/2024'
    assert values[header.index('Total Venta')] == '$35.700.000'
    assert values[header.index('60%')] == '$21.420.000'
    assert values[header.index('Socio')] == 'Socio A'


def test_attributed_record_keeps_exits_locked(client, admin_headers):
    record = _create_record(client, admin_headers, exits=2)
    r = client.post(f"/movement-records/{record['id']}/exit-details", json=[
        {'cause': 'death', 'quantity': 2},
    ], headers=admin_headers)
    assert r.status_code == 200

    url = f"/movement-records/{record['id']}"
    assert client.put(url, json={'exits': 3}, headers=admin_headers).status_code == 400
    assert client.put(url, json={'entries': 70}, headers=admin_headers).status_code == 200


def test_export_filename_keeps_member_name(client, admin_headers):
    record = _create_record(client, admin_headers, member='Socio Ñandú', exits=1)
    client.post(f"/movement-records/{record['id']}/exit-details", json=[
        {'cause': 'sale', 'quantity': 1, 'price_per_kg': 5, 'total_kg': 200},
    ], headers=admin_headers)

    r = client.get('/reports/sales/export', params={'member': 'Socio Ñandú'}, headers=admin_headers)

    assert r.status_code == 200
    disposition = r.headers['content-disposition']
    assert 'filename="ventas_Socio _and_.xlsx"' in disposition
    assert "filename*=UTF-8''ventas_Socio%20%C3%91and%C3%BA.xlsx" in disposition
