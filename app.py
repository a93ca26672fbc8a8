"""
Главное приложение бэк-офиса отеля
Точка входа: номера, бронирования, правила цен, отчёты
"""
import os
from datetime import date, timedelta

import click
from flask import jsonify

from backoffice import create_app, db
from backoffice.models import Booking, BookingStatus, Room, RoomStatus
from backoffice.modules.auth import require_token
from backoffice.services.dates import parse_date
from backoffice.store import get_store
from init_db import seed_database

# Создаем приложение
app = create_app(os.getenv('FLASK_CONFIG') or 'default')


@app.route('/')
def index():
    """Сводка для главной страницы"""
    error = require_token()
    if error is not None:
        return error

    today = date.today()
    rooms = Room.query.all()

    # Ближайшие заезды
    upcoming_checkins = Booking.query.filter(
        Booking.status == BookingStatus.ACTIVE.code,
        Booking.check_in >= today,
        Booking.check_in <= today + timedelta(days=7)
    ).order_by(Booking.check_in).limit(5).all()

    return jsonify({
        'total_rooms': len(rooms),
        'empty_rooms': sum(1 for r in rooms if r.status == RoomStatus.EMPTY.code),
        'occupied_rooms': sum(1 for r in rooms if r.status == RoomStatus.OCCUPIED.code),
        'out_of_service_rooms': sum(1 for r in rooms if r.status == RoomStatus.OUT_OF_SERVICE.code),
        'active_bookings': Booking.query.filter_by(status=BookingStatus.ACTIVE.code).count(),
        'upcoming_checkins': [b.to_dict() for b in upcoming_checkins],
    })


@app.cli.command('init-db')
def init_db():
    """Инициализация базы данных с тестовыми данными"""
    if seed_database():
        print('База данных инициализирована успешно!')


# очистка бд
@app.cli.command('clear-db')
def clear_db():
    """Очистка базы данных"""
    if input('Вы уверены? Все данные будут удалены (yes/no): ') == 'yes':
        db.drop_all()
        print('База данных очищена!')
    else:
        print('Отменено')


@app.cli.command('sync-room-status')
@click.option('--date', 'on_date', default=None, help='Дата в формате YYYY-MM-DD (по умолчанию сегодня)')
def sync_room_status(on_date):
    """Пересчитать статусы номеров по активным бронированиям"""
    today = parse_date(on_date, 'date') if on_date else date.today()
    changed = get_store().sync_room_statuses(today)
    print(f'Обновлено статусов номеров: {changed}')


if __name__ == '__main__':
    app.run(debug=True)
