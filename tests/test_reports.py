import pytest

from backoffice.errors import InvalidInput
from backoffice.services.reports import occupancy_report, report_days, revenue_for_range
from factories import d, make_booking, make_room


def test_report_days():
    assert report_days('daily', d('2024-06-10')) == [d('2024-06-10')]

    week = report_days('weekly', d('2024-06-10'))
    assert week[0] == d('2024-06-07')
    assert week[-1] == d('2024-06-13')
    assert len(week) == 7

    month = report_days('monthly', d('2024-02-10'))
    assert month[0] == d('2024-02-01')
    assert month[-1] == d('2024-02-29')


def test_unknown_period():
    with pytest.raises(InvalidInput):
        report_days('yearly', d('2024-06-10'))


def test_revenue_is_spread_over_nights():
    bookings = [
        make_booking(1, '2024-06-01', '2024-06-04', total_price=300),
        make_booking(2, '2024-06-02', '2024-06-03', status='checked-out', total_price=80),
        make_booking(3, '2024-06-02', '2024-06-03', status='cancelled', total_price=500),
    ]

    assert revenue_for_range(bookings, d('2024-06-01'), d('2024-06-01')) == 100
    assert revenue_for_range(bookings, d('2024-06-02'), d('2024-06-02')) == 180
    # день выезда уже не оплачивается
    assert revenue_for_range(bookings, d('2024-06-04'), d('2024-06-04')) == 0
    assert revenue_for_range(bookings, d('2024-05-01'), d('2024-06-30')) == 380


def test_occupancy_report():
    rooms = [
        make_room(id=1, status='occupied'),
        make_room(id=2),
        make_room(id=3),
        make_room(id=4, status='out-of-service'),
    ]
    bookings = [
        make_booking(1, '2024-06-01', '2024-06-04', total_price=300),
        make_booking(2, '2024-06-03', '2024-06-05', total_price=200),
    ]

    report = occupancy_report('weekly', d('2024-06-03'), rooms, bookings)

    assert report['total_rooms'] == 4
    assert report['occupied_rooms'] == 1
    assert report['empty_rooms'] == 2
    assert report['out_of_service_rooms'] == 1
    assert report['occupancy_rate'] == 25.0
    assert report['total_revenue'] == 500

    by_date = {day['date']: day for day in report['daily_occupancy']}
    assert by_date['2024-06-03']['occupied_rooms'] == 2
    assert by_date['2024-06-03']['occupancy_rate'] == 50.0
    assert by_date['2024-06-03']['revenue'] == 200
    assert by_date['2024-06-05']['occupied_rooms'] == 0


def test_empty_hotel_report():
    report = occupancy_report('daily', d('2024-06-03'), [], [])

    assert report['occupancy_rate'] == 0.0
    assert report['daily_occupancy'][0]['occupancy_rate'] == 0.0
