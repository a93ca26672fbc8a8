from factories import d


def test_monthly_report(client, auth_headers, store, room):
    store.add_room(number='102', room_type='single', capacity=1)
    store.add_booking(room, guest_name='Guest', check_in=d('2024-06-01'), check_out=d('2024-06-04'))

    response = client.get('/reports/monthly?date=2024-06-15', headers=auth_headers)

    assert response.status_code == 200
    data = response.get_json()
    assert data['report_type'] == 'monthly'
    assert data['currency'] == 'USD'
    assert data['total_rooms'] == 2
    assert data['occupied_rooms'] == 1
    assert data['occupancy_rate'] == 50.0
    assert data['total_revenue'] == 300
    assert len(data['daily_occupancy']) == 30
    assert data['daily_occupancy'][0]['revenue'] == 100


def test_unknown_period(client, auth_headers):
    assert client.get('/reports/yearly', headers=auth_headers).status_code == 400


def test_bad_report_date(client, auth_headers):
    assert client.get('/reports/daily?date=tomorrow', headers=auth_headers).status_code == 400
