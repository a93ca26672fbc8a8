"""
Модуль бронирования номеров

Функционал:
- Создание бронирований (с проверкой доступности и расчётом цены)
- Изменение бронирований
- Выселение и отмена
"""
import logging

from flask import Blueprint, jsonify, request

from backoffice.errors import Conflict, InvalidInput
from backoffice.models.booking import Booking, BookingStatus
from backoffice.modules.auth import require_token
from backoffice.modules.common import get_json, parse_decimal, parse_int, parse_rule_ids
from backoffice.services.availability import BOOKABLE_ROOM_STATUSES, is_room_available
from backoffice.services.dates import parse_date, parse_optional_date
from backoffice.store import get_store

logger = logging.getLogger(__name__)

bp = Blueprint('bookings', __name__, url_prefix='/bookings')
bp.before_request(require_token)


def _price_snapshot(data):
    """Снимок цены из запроса (поля, которых нет, остаются None)"""
    snapshot = {
        'base_price': parse_decimal(data.get('base_price'), 'base_price', required=False),
        'price_per_night': parse_decimal(data.get('price_per_night'), 'price_per_night', required=False),
        'nights': parse_int(data.get('nights'), 'nights', required=False),
        'total_price': parse_decimal(data.get('total_price'), 'total_price', required=False),
    }
    if snapshot['nights'] is not None and snapshot['nights'] <= 0:
        raise InvalidInput('Число ночей должно быть положительным')
    for name in ('base_price', 'price_per_night', 'total_price'):
        if snapshot[name] is not None and snapshot[name] < 0:
            raise InvalidInput(f'Поле {name} не может быть отрицательным')
    return snapshot


def _ensure_room_free(store, room, check_in, check_out, exclude_booking_id=None):
    if room.status not in BOOKABLE_ROOM_STATUSES:
        raise Conflict(f'Номер {room.number} выведен из обслуживания')
    if not is_room_available(room, store.list_bookings(), check_in, check_out,
                             exclude_booking_id=exclude_booking_id):
        logger.warning('Номер %s занят на %s - %s', room.number, check_in, check_out)
        raise Conflict(f'Номер {room.number} уже забронирован на выбранные даты')


@bp.get('/')
def index():
    """
    Список бронирований
    Фильтр по статусу: ?status=active|checked-out|cancelled
    """
    status_filter = request.args.get('status', '')

    # Базовый запрос
    query = Booking.query

    # Фильтр по статусу
    if status_filter:
        query = query.filter_by(status=status_filter)

    # Получаем бронирования, отсортированные по дате заезда
    bookings = query.order_by(Booking.check_in.desc()).all()
    return jsonify([booking.to_dict() for booking in bookings])


@bp.post('/')
def create():
    """
    Создание бронирования
    Новая бронь всегда активна; цена считается по правилам, если снимок цены не передан
    """
    store = get_store()
    data = get_json()

    room = store.get_room(parse_int(data.get('room_id'), 'room_id'))
    guest_name = (data.get('guest_name') or '').strip()
    if not guest_name:
        raise InvalidInput('Поле guest_name обязательно')

    check_in = parse_date(data.get('check_in'), 'check_in')
    check_out = parse_date(data.get('check_out'), 'check_out')

    _ensure_room_free(store, room, check_in, check_out)

    booking = store.add_booking(
        room,
        guest_name=guest_name,
        phone=(data.get('phone') or '').strip(),
        check_in=check_in,
        check_out=check_out,
        selected_rule_ids=parse_rule_ids(data.get('selected_rule_ids')),
        notes=data.get('notes') or '',
        status=BookingStatus.ACTIVE.code,
        **_price_snapshot(data)
    )
    return jsonify(booking.to_dict()), 201


@bp.get('/<int:booking_id>')
def detail(booking_id):
    """Детальная информация о бронировании"""
    return jsonify(get_store().get_booking(booking_id).to_dict())


@bp.put('/<int:booking_id>')
def edit(booking_id):
    """
    Изменение бронирования
    При смене дат или номера проверяется доступность и пересчитывается цена
    """
    store = get_store()
    booking = store.get_booking(booking_id)
    data = get_json()

    room_id = parse_int(data.get('room_id'), 'room_id', required=False)
    check_in = parse_optional_date(data.get('check_in'), 'check_in') or booking.check_in
    check_out = parse_optional_date(data.get('check_out'), 'check_out') or booking.check_out
    status = data.get('status') or booking.status

    target_room = store.get_room(room_id) if room_id is not None else booking.room
    moved = (target_room.id, check_in, check_out) != (booking.room_id, booking.check_in, booking.check_out)
    if status == BookingStatus.ACTIVE.code and (moved or not booking.is_active):
        _ensure_room_free(store, target_room, check_in, check_out, exclude_booking_id=booking.id)

    selected = data.get('selected_rule_ids')
    booking = store.update_booking(
        booking,
        room_id=target_room.id,
        guest_name=(data.get('guest_name') or '').strip() or None,
        phone=data.get('phone'),
        check_in=check_in,
        check_out=check_out,
        status=status,
        selected_rule_ids=parse_rule_ids(selected) if selected is not None else None,
        notes=data.get('notes'),
        **_price_snapshot(data)
    )
    return jsonify(booking.to_dict())


@bp.post('/<int:booking_id>/checkout')
def checkout(booking_id):
    """Выселение гостя (номер освобождается)"""
    store = get_store()
    booking = store.get_booking(booking_id)
    if not booking.is_active:
        return jsonify({'success': False, 'message': 'Невозможно выселить: бронь не активна'}), 400

    booking = store.update_booking(booking, status=BookingStatus.CHECKED_OUT.code)
    return jsonify({'success': True, 'status': booking.status})


@bp.post('/<int:booking_id>/cancel')
def cancel(booking_id):
    """Отмена бронирования (номер освобождается)"""
    store = get_store()
    booking = store.get_booking(booking_id)
    if not booking.is_active:
        return jsonify({'success': False, 'message': 'Невозможно отменить: бронь не активна'}), 400

    booking = store.update_booking(booking, status=BookingStatus.CANCELLED.code)
    return jsonify({'success': True, 'status': booking.status})
