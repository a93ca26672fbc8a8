"""
Модуль управления номерами отеля

Функционал:
- CRUD операции с номерами
- Просмотр списка номеров с фильтрацией по типу и статусу
"""
from flask import Blueprint, jsonify, request

from backoffice.models.booking import Booking
from backoffice.models.room import Room
from backoffice.modules.auth import require_token
from backoffice.modules.common import get_json, parse_decimal, parse_int
from backoffice.store import get_store

bp = Blueprint('rooms', __name__, url_prefix='/rooms')
bp.before_request(require_token)


@bp.get('/')
def index():
    """
    Список номеров
    Фильтры: ?type=single|double|family, ?status=empty|occupied|out-of-service
    """
    room_type = request.args.get('type', '')
    status = request.args.get('status', '')

    # Базовый запрос
    query = Room.query

    # Применяем фильтры
    if room_type:
        query = query.filter_by(room_type=room_type)
    if status:
        query = query.filter_by(status=status)

    rooms = query.order_by(Room.number).all()
    return jsonify([room.to_dict() for room in rooms])


@bp.post('/')
def create():
    """Создание нового номера (без цены берётся цена по типу)"""
    data = get_json()
    number = str(data.get('number') or '').strip()
    if not number:
        return jsonify({'success': False, 'message': 'Поле number обязательно'}), 400

    room = get_store().add_room(
        number=number,
        room_type=(data.get('type') or data.get('room_type') or '').strip(),
        capacity=parse_int(data.get('capacity'), 'capacity'),
        base_price=parse_decimal(data.get('base_price'), 'base_price', required=False),
        status=data.get('status') or None,
    )
    return jsonify(room.to_dict()), 201


@bp.get('/<int:room_id>')
def detail(room_id):
    """Номер и его активные бронирования"""
    room = get_store().get_room(room_id)

    data = room.to_dict()
    data['active_bookings'] = [b.to_dict() for b in room.bookings.order_by(Booking.check_in) if b.is_active]
    return jsonify(data)


@bp.put('/<int:room_id>')
def edit(room_id):
    """Редактирование номера (передаются только изменяемые поля)"""
    store = get_store()
    room = store.get_room(room_id)
    data = get_json()

    number = data.get('number')
    room = store.update_room(
        room,
        number=str(number).strip() if number is not None else None,
        room_type=data.get('type') or data.get('room_type'),
        capacity=parse_int(data.get('capacity'), 'capacity', required=False),
        base_price=parse_decimal(data.get('base_price'), 'base_price', required=False),
        status=data.get('status'),
    )
    return jsonify(room.to_dict())


@bp.delete('/<int:room_id>')
def delete(room_id):
    """
    Удаление номера
    Удаляет номер, его бронирования и правила цен (cascade)
    """
    store = get_store()
    room = store.get_room(room_id)
    store.delete_room(room)
    return jsonify({'success': True})
