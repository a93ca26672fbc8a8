# Записи вне базы для проверок чистых функций
from datetime import date

from backoffice.models import Booking, PriceRule, Room


def d(text):
    return date.fromisoformat(text)


def make_room(id=1, capacity=2, base_price=100, status='empty', room_type='double'):
    return Room(id=id, number=str(100 + id), room_type=room_type, capacity=capacity,
                base_price=base_price, status=status)


def make_booking(room_id, check_in, check_out, status='active', id=None, total_price=0):
    return Booking(id=id, room_id=room_id, guest_name='Guest', check_in=d(check_in),
                   check_out=d(check_out), status=status, total_price=total_price)


def make_rule(id, start, end, price_type, value, room_id=None):
    return PriceRule(id=id, start_date=d(start), end_date=d(end), price_type=price_type,
                     price_value=value, room_id=room_id, name=f'rule {id}')
