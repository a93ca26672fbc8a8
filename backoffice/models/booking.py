"""
Модель бронирования
"""
from enum import Enum
from datetime import datetime
from decimal import Decimal
from backoffice import db


class BookingStatus(Enum):
    """Статусы бронирования"""
    ACTIVE = ('active', 'Активно')
    CHECKED_OUT = ('checked-out', 'Выселен')
    CANCELLED = ('cancelled', 'Отменено')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def codes(cls):
        return [status.code for status in cls]


def _money(value):
    if value is None:
        return None
    return Decimal(str(value))


class Booking(db.Model):
    """
    Модель бронирования номера

    Цены (base_price, price_per_night, nights, total_price) - снимок на момент
    бронирования, при изменении правил цен не пересчитываются.
    """
    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)

    # Связь с номером (many-to-one)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=False, index=True)

    # Информация о госте
    guest_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False, default='')

    # Даты бронирования
    check_in = db.Column(db.Date, nullable=False, index=True)
    check_out = db.Column(db.Date, nullable=False, index=True)

    # Статус бронирования
    status = db.Column(db.String(20), nullable=False, default='active')

    # Снимок цены
    base_price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    price_per_night = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    nights = db.Column(db.Integer, nullable=False, default=0)
    total_price = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    # Явно выбранные правила цен (порядок важен)
    selected_rule_ids = db.Column(db.JSON, nullable=False, default=list)

    notes = db.Column(db.Text)

    # Временные метки
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, room_id, guest_name, check_in, check_out, phone='',
                 status=None, base_price=None, price_per_night=None, nights=None,
                 total_price=None, selected_rule_ids=None, notes='', id=None):
        self.id = id
        self.room_id = room_id
        self.guest_name = guest_name
        self.phone = phone
        self.check_in = check_in
        self.check_out = check_out
        self.status = status or BookingStatus.ACTIVE.code
        self.base_price = _money(base_price)
        self.price_per_night = _money(price_per_night)
        self.nights = nights
        self.total_price = _money(total_price)
        self.selected_rule_ids = list(selected_rule_ids or [])
        self.notes = notes

    @property
    def is_active(self):
        return self.status == BookingStatus.ACTIVE.code

    def get_status_display(self):
        """Получить отображаемое название статуса"""
        for status in BookingStatus:
            if status.code == self.status:
                return status.display_name
        return self.status

    def apply_quote(self, quote):
        """Зафиксировать рассчитанную цену в бронировании"""
        self.base_price = quote.base_price
        self.price_per_night = quote.price_per_night
        self.nights = quote.nights
        self.total_price = quote.total_price

    def to_dict(self):
        """Преобразование в словарь для JSON"""
        return {
            'id': self.id,
            'room_id': self.room_id,
            'room_number': self.room.number if self.room else None,
            'guest_name': self.guest_name,
            'phone': self.phone,
            'check_in': self.check_in.strftime('%Y-%m-%d'),
            'check_out': self.check_out.strftime('%Y-%m-%d'),
            'status': self.status,
            'status_display': self.get_status_display(),
            'base_price': float(self.base_price or 0),
            'price_per_night': float(self.price_per_night or 0),
            'nights': self.nights,
            'total_price': float(self.total_price or 0),
            'selected_rule_ids': self.selected_rule_ids,
            'notes': self.notes or '',
            'created_at': self.created_at.strftime('%Y-%m-%d %H:%M:%S') if self.created_at else None,
        }

    def __repr__(self):
        return f'<Booking {self.id}: {self.guest_name} ({self.check_in} - {self.check_out})>'
