"""
Модель номеров отеля
"""
from decimal import Decimal
from enum import Enum
from backoffice import db


class RoomType(Enum):
    # Типы номеров
    SINGLE = ('single', 'Одноместный', Decimal('80'))
    DOUBLE = ('double', 'Двухместный', Decimal('120'))
    FAMILY = ('family', 'Семейный', Decimal('180'))

    def __init__(self, code, name, base_price):
        self.code = code
        self.display_name = name
        self.base_price = base_price

    @classmethod
    def codes(cls):
        return [room_type.code for room_type in cls]


class RoomStatus(Enum):
    """Статусы номера"""
    EMPTY = ('empty', 'Свободен')
    OCCUPIED = ('occupied', 'Занят')
    OUT_OF_SERVICE = ('out-of-service', 'Не обслуживается')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def codes(cls):
        return [status.code for status in cls]


class Room(db.Model):
    """
    Модель номера отеля

    Статус номера хранится, а не вычисляется: его меняют операции
    с бронированиями в хранилище (см. RowStore).
    """
    __tablename__ = 'rooms'

    # поля таблицы
    id = db.Column(db.Integer, primary_key=True)
    number = db.Column(db.String(10), unique=True, nullable=False, index=True)  # Номер комнаты
    room_type = db.Column(db.String(20), nullable=False)  # тип номера
    capacity = db.Column(db.Integer, nullable=False)  # Вместимость (человек)
    base_price = db.Column(db.Numeric(10, 2), nullable=False)  # базовая цена за ночь
    status = db.Column(db.String(20), nullable=False, default='empty')  # empty/occupied/out-of-service

    # Связь с бронированиями (one-to-many)
    bookings = db.relationship('Booking', backref='room', lazy='dynamic',
                               cascade='all, delete-orphan')

    def __init__(self, number, room_type, capacity, base_price=None, status=None, id=None):
        """Инициализация номера; без цены берётся цена по типу"""
        self.id = id
        self.number = number
        self.room_type = room_type
        self.capacity = capacity
        self.status = status or RoomStatus.EMPTY.code

        if base_price is None:
            self._set_price_by_type()
        else:
            self.base_price = Decimal(str(base_price))

    def _set_price_by_type(self):
        """Цена по умолчанию для типа номера"""
        for room_type in RoomType:
            if room_type.code == self.room_type:
                self.base_price = room_type.base_price
                break
        else:
            self.base_price = RoomType.SINGLE.base_price

    def get_type_display(self):
        """Получить отображаемое название типа номера"""
        for room_type in RoomType:
            if room_type.code == self.room_type:
                return room_type.display_name
        return self.room_type

    def get_status_display(self):
        for status in RoomStatus:
            if status.code == self.status:
                return status.display_name
        return self.status

    def to_dict(self):
        """Преобразование в словарь для JSON"""
        return {
            'id': self.id,
            'number': self.number,
            'type': self.room_type,
            'type_display': self.get_type_display(),
            'capacity': self.capacity,
            'base_price': float(self.base_price or 0),
            'status': self.status,
            'status_display': self.get_status_display(),
        }

    def __repr__(self):
        return f'<Room {self.number} ({self.get_type_display()})>'
