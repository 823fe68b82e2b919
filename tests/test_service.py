from fastapi.testclient import TestClient
from customer_directory.main import create_app

def test_health_endpoints(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.json()['status'] == 'pass'

    assert client.get('/health/live').json() == {'status': 'alive'}

    resp = client.get('/health/ready')
    assert resp.status_code in [200, 503]
    assert resp.json()['checks']['database:connectivity']['status'] == 'pass'

    resp = client.get('/health/startup')
    assert resp.status_code == 200
    assert resp.json()['status'] == 'started'

def test_metrics_endpoint(client):
    data = client.get('/metrics').json()
    assert data['uptime_seconds'] >= 0
    assert 'memory_rss_bytes' in data['system']

def test_info_endpoints(client, settings):
    assert client.get('/').json()['service'] == settings.SERVICE_NAME
    assert client.get('/info').json()['endpoints']['customers'] == '/customers'

def test_request_id_is_echoed(client):
    resp = client.get('/health', headers={'X-Request-ID': 'abc-123'})
    assert resp.headers['X-Request-ID'] == 'abc-123'
    assert client.get('/health').headers['X-Request-ID']

def test_cors_allows_configured_origin_only(client):
    resp = client.options('/customers', headers={
        'Origin': 'http://localhost:3000',
        'Access-Control-Request-Method': 'PUT',
        'Access-Control-Request-Headers': 'Content-Type',
    })
    assert resp.status_code == 200
    assert resp.headers['access-control-allow-origin'] == 'http://localhost:3000'

    resp = client.get('/customers', headers={'Origin': 'http://evil.example'})
    assert 'access-control-allow-origin' not in resp.headers

def test_cors_origin_comes_from_settings(settings):
    settings.CORS_ORIGIN = 'http://admin.example'
    with TestClient(create_app(settings)) as c:
        resp = c.get('/customers', headers={'Origin': 'http://admin.example'})
        assert resp.headers['access-control-allow-origin'] == 'http://admin.example'

def test_store_is_disposed_on_shutdown(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        c.post('/customers', json={'first_name': 'Persisted'})
    # A fresh app on the same file sees the earlier write
    with TestClient(create_app(settings)) as c:
        assert c.get('/customers').json()['total'] == 1

def test_existing_schema_is_stamped_before_upgrade(settings, monkeypatch):
    from customer_directory import main
    from customer_directory.infrastructure.db import Database

    commands = []

    class Completed:
        returncode = 0
        stderr = ''

    def fake_run(args, **kwargs):
        commands.append(args)
        return Completed()

    monkeypatch.setattr(main.subprocess, 'run', fake_run)
    database = Database(settings.DATABASE_URL)
    try:
        main.run_migrations(settings, database)
        assert commands == [['alembic', 'upgrade', 'head']]

        commands.clear()
        database.init_models()
        main.run_migrations(settings, database)
        assert commands == [['alembic', 'stamp', 'head'], ['alembic', 'upgrade', 'head']]
    finally:
        database.dispose()
