#!/usr/bin/env python3
"""
Скрипт инициализации базы данных
"""
import os
import sys

# Добавляем текущую директорию в путь
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from datetime import date, timedelta

from backoffice import create_app, db
from backoffice.models import Booking, PriceRule, PriceType, Room, RoomStatus, RoomType
from backoffice.store import get_store


def seed_database():
    """Тестовые номера, правила цен и бронирование (внутри app context)"""
    db.create_all()

    # Проверяем, есть ли уже данные
    if Room.query.first():
        print('База данных уже содержит данные!')
        return False

    store = get_store()

    print('Добавление тестовых номеров...')
    rooms_data = [
        # Одноместные
        ('101', RoomType.SINGLE.code, 1, None),
        ('102', RoomType.SINGLE.code, 1, None),
        # Двухместные
        ('201', RoomType.DOUBLE.code, 2, None),
        ('202', RoomType.DOUBLE.code, 2, 135),
        ('203', RoomType.DOUBLE.code, 3, 150),
        # Семейные
        ('301', RoomType.FAMILY.code, 4, None),
        ('302', RoomType.FAMILY.code, 5, 220),
    ]
    for number, room_type, capacity, base_price in rooms_data:
        store.add_room(number=number, room_type=room_type, capacity=capacity, base_price=base_price)
    print(f'Добавлено {len(rooms_data)} номеров')

    # Номер на ремонте
    store.update_room(Room.query.filter_by(number='102').first(), status=RoomStatus.OUT_OF_SERVICE.code)

    print('Добавление правил цен...')
    today = date.today()
    store.add_price_rule(
        name='Летний сезон', room_id=None,
        start_date=date(today.year, 6, 1), end_date=date(today.year, 8, 31),
        price_type=PriceType.PERCENTAGE.code, price_value=20,
    )
    store.add_price_rule(
        name='Скидка ближайшего месяца', room_id=None,
        start_date=today, end_date=today + timedelta(days=30),
        price_type=PriceType.PERCENTAGE.code, price_value=-10,
    )
    family = Room.query.filter_by(number='301').first()
    store.add_price_rule(
        name='Спеццена на семейный номер', room_id=family.id,
        start_date=today + timedelta(days=7), end_date=today + timedelta(days=14),
        price_type=PriceType.FIXED.code, price_value=160,
    )

    print('Добавление тестового бронирования...')
    room = Room.query.filter_by(number='201').first()
    store.add_booking(
        room,
        guest_name='John Smith',
        phone='+1 555 123 4567',
        check_in=today + timedelta(days=2),
        check_out=today + timedelta(days=5),
        notes='Ранний заезд, если возможно',
    )
    return True


def init_database():
    """Инициализация базы данных с тестовыми данными"""
    app = create_app(os.getenv('FLASK_CONFIG') or 'default')

    with app.app_context():
        if seed_database():
            print('\n✅ База данных инициализирована успешно!')
        print(f'🏨 Номеров: {Room.query.count()}')
        print(f'💲 Правил цен: {PriceRule.query.count()}')
        print(f'📅 Бронирований: {Booking.query.count()}')


if __name__ == '__main__':
    init_database()
