# Модель правил динамического ценообразования
from enum import Enum
from decimal import Decimal
from backoffice import db

# Обозначение правила "для всех номеров" во внешнем API
ALL_ROOMS = 'all'


class PriceType(Enum):
    FIXED = ('fixed', 'Фиксированная цена')
    PERCENTAGE = ('percentage', 'Процент к цене')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def codes(cls):
        return [price_type.code for price_type in cls]


class PriceRule(db.Model):
    """
    Правило цены на период [start_date, end_date] (обе даты включительно).

    room_id = NULL - правило действует для всех номеров.
    """
    __tablename__ = 'price_rules'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=True, index=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    price_type = db.Column(db.String(20), nullable=False, default='fixed')  # fixed/percentage
    price_value = db.Column(db.Numeric(10, 2), nullable=False)              # сумма или процент (со знаком)
    name = db.Column(db.String(120), nullable=False, default='')

    room = db.relationship('Room', backref=db.backref('price_rules', cascade='all, delete-orphan'))

    def __init__(self, start_date, end_date, price_value, price_type=None,
                 room_id=None, name='', id=None):
        self.id = id
        self.room_id = room_id
        self.start_date = start_date
        self.end_date = end_date
        self.price_type = price_type or PriceType.FIXED.code
        self.price_value = Decimal(str(price_value))
        self.name = name

    @property
    def applies_to_all_rooms(self):
        return self.room_id is None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'room_id': ALL_ROOMS if self.applies_to_all_rooms else self.room_id,
            'start_date': self.start_date.strftime('%Y-%m-%d'),
            'end_date': self.end_date.strftime('%Y-%m-%d'),
            'price_type': self.price_type,
            'price_value': float(self.price_value or 0),
            'name': self.name or '',
        }

    def __repr__(self):
        return f'<PriceRule {self.id}: {self.name} ({self.start_date} - {self.end_date})>'
