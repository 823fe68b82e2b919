import pytest
from fastapi.testclient import TestClient
from customer_directory.core_settings import Settings
from customer_directory.main import create_app

@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'customer.db'}",
        RUN_MIGRATIONS=False,
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c

@pytest.fixture
def make_customer(client):
    def _make(**fields):
        resp = client.post('/customers', json=fields)
        assert resp.status_code == 200
        return resp.json()['id']
    return _make

@pytest.fixture
def make_address(client):
    def _make(customer_id, address, city=None, state=None):
        resp = client.post('/addresses', json={
            'customer_id': customer_id,
            'address': address,
            'city': city,
            'state': state,
        })
        assert resp.status_code == 200
    return _make
