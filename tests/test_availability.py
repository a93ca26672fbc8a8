import pytest

from backoffice.errors import InvalidInput, InvalidInterval
from backoffice.services.availability import (applicable_rules, booking_conflicts,
                                              find_available_rooms, is_room_available)
from factories import d, make_booking, make_room, make_rule

REQUEST = (d('2024-06-01'), d('2024-06-04'))


@pytest.mark.parametrize('check_in, check_out, conflict', [
    ('2024-06-02', '2024-06-05', True),   # начинается внутри запроса
    ('2024-05-29', '2024-06-02', True),   # заканчивается внутри запроса
    ('2024-05-30', '2024-06-10', True),   # покрывает запрос целиком
    ('2024-06-02', '2024-06-03', True),   # внутри запроса
    ('2024-06-04', '2024-06-07', False),  # заезд в день выезда
    ('2024-05-28', '2024-06-01', False),  # выезд в день заезда
    ('2024-07-01', '2024-07-05', False),
])
def test_booking_conflicts(check_in, check_out, conflict):
    assert booking_conflicts(d(check_in), d(check_out), *REQUEST) is conflict


def test_only_active_bookings_of_the_room_block_it():
    room = make_room(id=1)
    bookings = [
        make_booking(1, '2024-06-02', '2024-06-05', status='cancelled'),
        make_booking(1, '2024-06-01', '2024-06-03', status='checked-out'),
        make_booking(2, '2024-06-01', '2024-06-04'),
    ]

    assert is_room_available(room, bookings, *REQUEST)

    bookings.append(make_booking(1, '2024-06-02', '2024-06-05'))
    assert not is_room_available(room, bookings, *REQUEST)


def test_excluded_booking_is_ignored():
    room = make_room(id=1)
    bookings = [make_booking(1, '2024-06-01', '2024-06-04', id=7)]

    assert not is_room_available(room, bookings, *REQUEST)
    assert is_room_available(room, bookings, *REQUEST, exclude_booking_id=7)


def test_applicable_rules_filter_by_room_and_period():
    rules = [
        make_rule(1, '2024-05-01', '2024-06-01', 'fixed', 150, room_id=None),
        make_rule(2, '2024-06-04', '2024-06-30', 'fixed', 150, room_id=1),
        make_rule(3, '2024-06-02', '2024-06-02', 'fixed', 150, room_id=2),
        make_rule(4, '2024-07-01', '2024-07-31', 'fixed', 150, room_id=None),
        make_rule(5, '2024-01-01', '2024-12-31', 'percentage', 5, room_id=1),
    ]

    assert [r.id for r in applicable_rules(rules, 1, *REQUEST)] == [1, 2, 5]


def test_available_room_gets_price():
    rooms = [make_room(id=1, capacity=2, base_price=100)]

    result = find_available_rooms(rooms, [], [], *REQUEST, 2)

    assert len(result) == 1
    assert result[0]['id'] == 1
    assert result[0]['nights'] == 3
    assert result[0]['price_per_night'] == 100
    assert result[0]['total_price'] == 300
    assert result[0]['applicable_rules'] == []


def test_overlapping_booking_removes_room():
    rooms = [make_room(id=1, capacity=2, base_price=100)]
    bookings = [make_booking(1, '2024-06-02', '2024-06-05')]

    assert find_available_rooms(rooms, bookings, [], *REQUEST, 2) == []


def test_capacity_and_out_of_service_filter():
    rooms = [
        make_room(id=1, capacity=1),
        make_room(id=2, capacity=4, status='out-of-service'),
        make_room(id=3, capacity=2, status='occupied'),
        make_room(id=4, capacity=3),
    ]

    result = find_available_rooms(rooms, [], [], *REQUEST, 2)

    assert [room['id'] for room in result] == [3, 4]


def test_selected_rules_only_are_applied():
    rooms = [make_room(id=1, base_price=100)]
    rules = [
        make_rule(1, '2024-06-01', '2024-06-30', 'percentage', 10),
        make_rule(2, '2024-06-01', '2024-06-30', 'fixed', 150, room_id=1),
    ]

    auto = find_available_rooms(rooms, [], rules, *REQUEST, 1)
    chosen = find_available_rooms(rooms, [], rules, *REQUEST, 1, selected_rule_ids=[1])

    assert auto[0]['price_per_night'] == 150
    assert chosen[0]['price_per_night'] == 110
    assert [r['id'] for r in chosen[0]['applicable_rules']] == [1, 2]


@pytest.mark.parametrize('guests', [0, -1, 'two', None])
def test_invalid_guest_count(guests):
    with pytest.raises(InvalidInput):
        find_available_rooms([make_room()], [], [], *REQUEST, guests)


def test_invalid_interval():
    with pytest.raises(InvalidInterval):
        find_available_rooms([make_room()], [], [], d('2024-06-04'), d('2024-06-01'), 1)
