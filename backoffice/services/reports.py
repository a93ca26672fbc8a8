"""
Отчёты о загрузке отеля и выручке

Периоды:
- daily: только указанная дата
- weekly: 7 дней, начиная за 3 дня до даты
- monthly: все дни месяца указанной даты
"""
import calendar
from datetime import date, timedelta
from decimal import Decimal

from backoffice.errors import InvalidInput
from backoffice.models.booking import BookingStatus
from backoffice.models.room import RoomStatus
from backoffice.services.dates import DATE_FORMAT

REPORT_PERIODS = ('daily', 'weekly', 'monthly')

# Брони, приносящие выручку
REVENUE_STATUSES = (BookingStatus.ACTIVE.code, BookingStatus.CHECKED_OUT.code)


def report_days(period, report_date):
    """Список дней отчёта для периода"""
    if period == 'daily':
        return [report_date]
    if period == 'weekly':
        start = report_date - timedelta(days=3)
        return [start + timedelta(days=i) for i in range(7)]
    if period == 'monthly':
        days_in_month = calendar.monthrange(report_date.year, report_date.month)[1]
        return [date(report_date.year, report_date.month, day) for day in range(1, days_in_month + 1)]
    raise InvalidInput(f'Неизвестный период отчёта: {period!r} (daily, weekly или monthly)')


def _rate(part, total):
    if not total:
        return 0.0
    return round(part / total * 100, 2)


def occupied_room_ids(bookings, day):
    """Номера, в которых есть активная бронь на ночь day"""
    return {
        booking.room_id for booking in bookings
        if booking.status == BookingStatus.ACTIVE.code
        and booking.check_in <= day < booking.check_out
    }


def revenue_for_range(bookings, start, end):
    """
    Выручка за ночи с start по end включительно

    Стоимость брони распределяется равномерно по её ночам.
    """
    range_end = end + timedelta(days=1)
    revenue = Decimal('0')
    for booking in bookings:
        if booking.status not in REVENUE_STATUSES:
            continue
        nights = (booking.check_out - booking.check_in).days
        if nights <= 0:
            continue
        overlap = (min(booking.check_out, range_end) - max(booking.check_in, start)).days
        if overlap <= 0:
            continue
        daily_rate = Decimal(str(booking.total_price or 0)) / nights
        revenue += daily_rate * overlap
    return round(float(revenue), 2)


def occupancy_report(period, report_date, rooms, bookings):
    """Сводка по номерам и загрузка/выручка по дням периода"""
    days = report_days(period, report_date)

    total_rooms = len(rooms)
    occupied_rooms = sum(1 for room in rooms if room.status == RoomStatus.OCCUPIED.code)
    empty_rooms = sum(1 for room in rooms if room.status == RoomStatus.EMPTY.code)
    out_of_service_rooms = sum(1 for room in rooms if room.status == RoomStatus.OUT_OF_SERVICE.code)

    daily_occupancy = []
    for day in days:
        occupied = occupied_room_ids(bookings, day)
        daily_occupancy.append({
            'date': day.strftime(DATE_FORMAT),
            'occupancy_rate': _rate(len(occupied), total_rooms),
            'occupied_rooms': len(occupied),
            'total_rooms': total_rooms,
            'revenue': revenue_for_range(bookings, day, day),
        })

    return {
        'report_type': period,
        'report_date': report_date.strftime(DATE_FORMAT),
        'total_rooms': total_rooms,
        'occupied_rooms': occupied_rooms,
        'empty_rooms': empty_rooms,
        'out_of_service_rooms': out_of_service_rooms,
        'occupancy_rate': _rate(occupied_rooms, total_rooms),
        'total_revenue': revenue_for_range(bookings, days[0], days[-1]),
        'daily_occupancy': daily_occupancy,
    }
