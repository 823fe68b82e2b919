from sqlalchemy import text

def test_create_address_requires_address_text(client, make_customer):
    customer_id = make_customer(first_name='Moe')

    for body in ({'customer_id': customer_id, 'address': '', 'city': 'Springfield'},
                 {'customer_id': customer_id, 'city': 'Springfield'}):
        resp = client.post('/addresses', json=body)
        assert resp.status_code == 400
        assert resp.text == 'Address is required.'
        assert resp.headers['content-type'].startswith('text/plain')

    assert client.get(f'/addresses/{customer_id}').json() == []

def test_create_address_acknowledges_with_text(client, make_customer):
    customer_id = make_customer(first_name='Moe')
    resp = client.post('/addresses', json={
        'customer_id': customer_id,
        'address': "Moe's Tavern",
        'city': 'Springfield',
        'state': 'OR',
    })
    assert resp.status_code == 200
    assert resp.text == 'Address created successfully.'

    rows = client.get(f'/addresses/{customer_id}').json()
    assert len(rows) == 1
    assert rows[0]['customer_id'] == customer_id
    assert rows[0]['address'] == "Moe's Tavern"
    assert rows[0]['city'] == 'Springfield'
    assert rows[0]['state'] == 'OR'
    assert isinstance(rows[0]['id'], int)

def test_address_for_unknown_customer_is_accepted(client):
    resp = client.post('/addresses', json={'customer_id': 404, 'address': 'Nowhere'})
    assert resp.status_code == 200
    assert [r['address'] for r in client.get('/addresses/404').json()] == ['Nowhere']

def test_list_addresses_in_insertion_order(client, make_customer, make_address):
    customer_id = make_customer(first_name='Apu')
    for line in ('first', 'second', 'third'):
        make_address(customer_id, line)

    rows = client.get(f'/addresses/{customer_id}').json()
    assert [r['address'] for r in rows] == ['first', 'second', 'third']

def test_list_addresses_for_customer_without_any(client):
    resp = client.get('/addresses/77')
    assert resp.status_code == 200
    assert resp.json() == []

def test_update_address_changes_only_address_text(client, make_customer, make_address):
    customer_id = make_customer(first_name='Krusty')
    make_address(customer_id, 'old street', 'Springfield', 'OR')
    address_id = client.get(f'/addresses/{customer_id}').json()[0]['id']

    resp = client.put(f'/addresses/{address_id}', json={'address': 'new street', 'city': 'Ignored'})
    assert resp.status_code == 200
    assert resp.text == 'Address updated successfully.'

    row = client.get(f'/addresses/{customer_id}').json()[0]
    assert row['address'] == 'new street'
    assert row['city'] == 'Springfield'
    assert row['state'] == 'OR'

def test_update_missing_address_succeeds(client, make_customer, make_address):
    customer_id = make_customer(first_name='Otto')
    make_address(customer_id, 'bus depot')

    resp = client.put('/addresses/999', json={'address': 'anything'})
    assert resp.status_code == 200
    assert resp.text == 'Address updated successfully.'
    assert [r['address'] for r in client.get(f'/addresses/{customer_id}').json()] == ['bus depot']

def test_update_address_to_null_is_store_error(client, make_customer, make_address):
    customer_id = make_customer(first_name='Nelson')
    make_address(customer_id, 'somewhere')
    address_id = client.get(f'/addresses/{customer_id}').json()[0]['id']

    resp = client.put(f'/addresses/{address_id}', json={})
    assert resp.status_code == 500
    assert resp.text == 'Error updating address.'
    assert client.get(f'/addresses/{customer_id}').json()[0]['address'] == 'somewhere'

def test_delete_address(client, make_customer, make_address):
    customer_id = make_customer(first_name='Ralph')
    make_address(customer_id, 'keep')
    make_address(customer_id, 'drop')
    rows = client.get(f'/addresses/{customer_id}').json()
    drop_id = next(r['id'] for r in rows if r['address'] == 'drop')

    resp = client.delete(f'/addresses/{drop_id}')
    assert resp.status_code == 200
    assert resp.text == 'Address deleted successfully.'
    assert [r['address'] for r in client.get(f'/addresses/{customer_id}').json()] == ['keep']

def test_delete_missing_address_succeeds(client):
    resp = client.delete('/addresses/999')
    assert resp.status_code == 200
    assert resp.text == 'Address deleted successfully.'

def test_address_store_errors_are_500(client):
    with client.app.state.database.engine.begin() as conn:
        conn.execute(text('DROP TABLE address'))

    resp = client.get('/addresses/1')
    assert resp.status_code == 500
    assert resp.text == 'Error fetching addresses.'

    resp = client.post('/addresses', json={'customer_id': 1, 'address': 'x'})
    assert resp.status_code == 500
    assert resp.text == 'Error creating address.'

    resp = client.delete('/addresses/1')
    assert resp.status_code == 500
    assert resp.text == 'Error deleting address.'

def test_create_address_without_body_is_400(client):
    resp = client.post('/addresses')
    assert resp.status_code == 400
    assert resp.text == 'Address is required.'

def test_create_address_with_form_body_is_400(client, make_customer):
    customer_id = make_customer(first_name='Barney')
    resp = client.post('/addresses', data={'customer_id': str(customer_id), 'address': 'Bar stool'})
    assert resp.status_code == 400
    assert resp.text == 'Address is required.'
    assert client.get(f'/addresses/{customer_id}').json() == []
