from factories import d


def _rule(client, headers, **fields):
    payload = {'name': 'Summer', 'room_id': 'all', 'start_date': '2024-06-01',
               'end_date': '2024-08-31', 'price_type': 'percentage', 'price_value': 20}
    payload.update(fields)
    return client.post('/pricing/rules', json=payload, headers=headers)


def test_create_rule_for_all_rooms(client, auth_headers):
    response = _rule(client, auth_headers)

    assert response.status_code == 201
    data = response.get_json()
    assert data['room_id'] == 'all'
    assert data['price_type'] == 'percentage'
    assert data['price_value'] == 20


def test_create_rule_validation(client, auth_headers, room):
    assert _rule(client, auth_headers, end_date='2024-05-01').status_code == 400
    assert _rule(client, auth_headers, price_type='bonus').status_code == 400
    assert _rule(client, auth_headers, price_value='abc').status_code == 400
    assert _rule(client, auth_headers, name='').status_code == 400
    assert _rule(client, auth_headers, room_id=999).status_code == 404
    assert _rule(client, auth_headers, room_id=room.id).status_code == 201


def test_list_rules_puts_global_rules_first(client, auth_headers, room):
    _rule(client, auth_headers, name='Room only', room_id=room.id)
    _rule(client, auth_headers, name='Everyone')

    names = [r['name'] for r in client.get('/pricing/rules', headers=auth_headers).get_json()]
    only_global = client.get('/pricing/rules?room_id=all', headers=auth_headers).get_json()

    assert names == ['Everyone', 'Room only']
    assert [r['name'] for r in only_global] == ['Everyone']


def test_update_rule_scope(client, auth_headers, room):
    rule_id = _rule(client, auth_headers, room_id=room.id).get_json()['id']

    response = client.put(f'/pricing/rules/{rule_id}', json={'room_id': 'all', 'price_value': 5},
                          headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()['room_id'] == 'all'
    assert response.get_json()['price_value'] == 5


def test_delete_rule(client, auth_headers):
    rule_id = _rule(client, auth_headers).get_json()['id']

    assert client.delete(f'/pricing/rules/{rule_id}', headers=auth_headers).status_code == 200
    assert client.get(f'/pricing/rules/{rule_id}', headers=auth_headers).status_code == 404


def test_quote_for_stay(client, auth_headers, store, room):
    first = store.add_price_rule(start_date=d('2024-06-01'), end_date=d('2024-06-30'),
                                 price_type='percentage', price_value=10, name='A')
    second = store.add_price_rule(start_date=d('2024-06-01'), end_date=d('2024-06-30'),
                                  price_type='percentage', price_value=10, name='B')

    response = client.get(f'/pricing/quote?room_id={room.id}&check_in=2024-06-01'
                          f'&check_out=2024-06-03&rules={first.id},{second.id}',
                          headers=auth_headers)

    data = response.get_json()
    assert data['price_per_night'] == 121
    assert data['total_price'] == 242
    assert data['nights'] == 2
    assert len(data['applicable_rules']) == 2


def test_quote_without_dates(client, auth_headers, store, room):
    rule = store.add_price_rule(start_date=d('2024-06-01'), end_date=d('2024-06-30'),
                                price_type='fixed', price_value=75, name='Flat')

    data = client.get(f'/pricing/quote?room_id={room.id}&rules={rule.id}',
                      headers=auth_headers).get_json()

    assert data['price_per_night'] == 75
    assert data['nights'] is None


def test_quote_with_bad_rule_ids(client, auth_headers, room):
    response = client.get(f'/pricing/quote?room_id={room.id}&rules=one', headers=auth_headers)

    assert response.status_code == 400


def test_quote_without_dates_and_rules_is_base_price(client, auth_headers, store, room):
    store.add_price_rule(start_date=d('2024-06-01'), end_date=d('2024-06-30'),
                         price_type='fixed', price_value=500, name='June')
    store.add_price_rule(start_date=d('2024-12-01'), end_date=d('2024-12-31'),
                         price_type='percentage', price_value=50, name='December')

    data = client.get(f'/pricing/quote?room_id={room.id}', headers=auth_headers).get_json()

    assert data['price_per_night'] == 100
    assert data['applied_rule_ids'] == []
    assert len(data['applicable_rules']) == 2
    assert data['currency'] == 'USD'
