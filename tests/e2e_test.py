"""
End-to-end API test script.
Uses urllib (no external deps needed).

Runs against a live server with an onboarded agent account:
    E2E_USERNAME=agent E2E_PASSWORD=secret python tests/e2e_test.py
"""

import base64
import json
import os
import urllib.error
import urllib.request
from datetime import date, timedelta

BASE = os.environ.get('E2E_BASE_URL', 'http://localhost:8000/api')
USERNAME = os.environ.get('E2E_USERNAME', 'agent')
PASSWORD = os.environ.get('E2E_PASSWORD', 'agent-pass')


def auth_header():
    token = base64.b64encode(f'{USERNAME}:{PASSWORD}'.encode('utf-8')).decode('ascii')
    return {'Authorization': f'Basic {token}'}


def api_call(method, url, data=None, auth=True):
    """Make an API call and return status + body."""
    headers = auth_header() if auth else {}
    body = None
    if data is not None:
        body = json.dumps(data).encode('utf-8')
        headers['Content-Type'] = 'application/json'

    req = urllib.request.Request(url, data=body, headers=headers, method=method)
    try:
        response = urllib.request.urlopen(req)
        raw = response.read().decode('utf-8')
        return response.status, json.loads(raw) if raw else None
    except urllib.error.HTTPError as e:
        raw = e.read().decode('utf-8')
        return e.code, json.loads(raw) if raw else None


def main():
    print('=' * 60)
    print('AGENT DASHBOARD — END-TO-END API TESTS')
    print('=' * 60)

    today = date.today()

    # ─── Test 1: Auth gate ───
    print('\n--- TEST 1: GET /api/clients without credentials ---')
    status, body = api_call('GET', f'{BASE}/clients', auth=False)
    assert status == 401, f'Expected 401, got {status}'
    print('✓ PASSED')

    # ─── Test 2: Profile ───
    print('\n--- TEST 2: GET /api/profile ---')
    status, body = api_call('GET', f'{BASE}/profile')
    print(f'Status: {status}')
    print(f'Response: {json.dumps(body, indent=2)}')
    assert status == 200, f'Expected 200, got {status}'
    assert body['profile_complete'], 'E2E agent must have a complete profile'
    print('✓ PASSED')

    # ─── Test 3: Capture client ───
    print('\n--- TEST 3: POST /api/clients ---')
    status, body = api_call('POST', f'{BASE}/clients', {
        'full_name': 'John Kamau',
        'phone': '0712345678',
        'email': 'john@example.co.ke',
        'vehicle_number': 'KCA 123X',
        'policy_type': 'Comprehensive',
        'start_date': (today - timedelta(days=355)).isoformat(),
        'premium': 25000,
        'commission': 2500,
    })
    print(f'Status: {status}')
    print(f'Response: {json.dumps(body, indent=2)}')

    client_id = body['id']
    assert status == 201, f'Expected 201, got {status}'
    assert body['status'] == 'expiring', 'Status should be expiring'
    assert body['policy_number'] == 'POL 3X'
    print('✓ PASSED')

    # ─── Test 4: Dashboard ───
    print('\n--- TEST 4: GET /api/dashboard ---')
    status, body = api_call('GET', f'{BASE}/dashboard')
    print(f'Status: {status}')
    print(f'Response: {json.dumps(body, indent=2)}')

    assert status == 200, f'Expected 200, got {status}'
    assert body['stats']['total_clients'] >= 1
    assert any(alert['id'] == client_id for alert in body['renewal_alerts'])
    print('✓ PASSED')

    # ─── Test 5: Search and filter ───
    print('\n--- TEST 5: GET /api/clients?search=kca&status=expiring ---')
    status, body = api_call('GET', f'{BASE}/clients?search=kca&status=expiring')
    assert status == 200, f'Expected 200, got {status}'
    assert any(row['id'] == client_id for row in body['results'])
    print('✓ PASSED')

    # ─── Test 6: Validation errors ───
    print('\n--- TEST 6: Validation errors (400s) ---')
    status, body = api_call('POST', f'{BASE}/clients', {
        'full_name': 'Bad Phone',
        'phone': '12345',
    })
    assert status == 400, f'Expected 400, got {status}'
    assert body['detail']['reason'] == 'phone_invalid'
    print(f'  clients (bad phone) → {status} ✓')
    print('✓ PASSED')

    # ─── Test 7: Delete ───
    print(f'\n--- TEST 7: DELETE /api/clients/{client_id} ---')
    status, body = api_call('DELETE', f'{BASE}/clients/{client_id}')
    assert status == 204, f'Expected 204, got {status}'

    status, body = api_call('GET', f'{BASE}/clients/{client_id}')
    assert status == 404, f'Expected 404, got {status}'
    print('✓ PASSED')

    print('\n' + '=' * 60)
    print('ALL 7 TESTS PASSED ✓')
    print('=' * 60)


if __name__ == '__main__':
    main()
