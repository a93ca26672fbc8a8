"""
Хранилище номеров, бронирований и правил цен

Узкий интерфейс поверх сессии SQLAlchemy: чтение списков, поиск по id,
создание/изменение/удаление записей. Побочные эффекты бронирований
(статус номера) выполняются здесь же, в одной транзакции с бронью.

Одновременная запись двух броней на один номер не сериализуется.
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from backoffice.errors import Conflict, InvalidInput, InvalidInterval, NotFound
from backoffice.models import (Booking, BookingStatus, PriceRule, PriceType,
                               Room, RoomStatus, RoomType)
from backoffice.services.availability import applicable_rules
from backoffice.services.dates import count_nights
from backoffice.services.pricing import resolve_price

logger = logging.getLogger(__name__)

PRICE_FIELDS = ('base_price', 'price_per_night', 'nights', 'total_price')


def get_store():
    """Хранилище текущего приложения"""
    return current_app.extensions['row_store']


class RowStore:

    def __init__(self, session):
        self.session = session

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception('Ошибка записи в базу данных')
            raise

    # ---------- чтение ----------

    def list_rooms(self):
        return self.session.query(Room).order_by(Room.id).all()

    def list_bookings(self):
        return self.session.query(Booking).order_by(Booking.id).all()

    def list_price_rules(self):
        return self.session.query(PriceRule).order_by(PriceRule.id).all()

    def get_room(self, room_id):
        room = self.session.get(Room, room_id)
        if room is None:
            raise NotFound(f'Номер {room_id} не найден')
        return room

    def get_booking(self, booking_id):
        booking = self.session.get(Booking, booking_id)
        if booking is None:
            raise NotFound(f'Бронирование {booking_id} не найдено')
        return booking

    def get_price_rule(self, rule_id):
        rule = self.session.get(PriceRule, rule_id)
        if rule is None:
            raise NotFound(f'Правило цены {rule_id} не найдено')
        return rule

    # ---------- номера ----------

    def _validate_room(self, room):
        if room.room_type not in RoomType.codes():
            raise InvalidInput(f'Неизвестный тип номера: {room.room_type!r}')
        if room.status not in RoomStatus.codes():
            raise InvalidInput(f'Неизвестный статус номера: {room.status!r}')
        if not room.capacity or room.capacity <= 0:
            raise InvalidInput('Вместимость должна быть положительной')
        if room.base_price is None or room.base_price <= 0:
            raise InvalidInput('Базовая цена должна быть положительной')

        existing = self.session.query(Room).filter(Room.number == room.number).first()
        if existing is not None and existing is not room:
            raise Conflict(f'Номер {room.number} уже существует')

    def add_room(self, number, room_type, capacity, base_price=None, status=None):
        room = Room(number=number, room_type=room_type, capacity=capacity,
                    base_price=base_price, status=status)
        self._validate_room(room)

        self.session.add(room)
        self._commit()
        logger.info('Создан номер %s (id=%s)', room.number, room.id)
        return room

    def update_room(self, room, **fields):
        for name in ('number', 'room_type', 'capacity', 'base_price', 'status'):
            if name in fields and fields[name] is not None:
                setattr(room, name, fields[name])

        with self.session.no_autoflush:
            self._validate_room(room)
        self._commit()
        logger.info('Номер %s (id=%s) обновлён', room.number, room.id)
        return room

    def delete_room(self, room):
        room_id = room.id
        self.session.delete(room)
        self._commit()
        logger.info('Номер id=%s удалён', room_id)

    def sync_room_statuses(self, today):
        """
        Пересчитать сохранённые статусы номеров по активным броням на today

        Номера out-of-service не трогаем. Возвращает число изменённых номеров.
        """
        active = [b for b in self.list_bookings() if b.is_active]
        changed = 0
        for room in self.list_rooms():
            if room.status == RoomStatus.OUT_OF_SERVICE.code:
                continue
            busy = any(b.room_id == room.id and b.check_in <= today < b.check_out for b in active)
            status = RoomStatus.OCCUPIED.code if busy else RoomStatus.EMPTY.code
            if room.status != status:
                logger.info('Статус номера %s: %s -> %s', room.number, room.status, status)
                room.status = status
                changed += 1
        self._commit()
        return changed

    # ---------- бронирования ----------

    def quote_for_stay(self, room, check_in, check_out, selected_rule_ids=None):
        """Цена проживания в номере по текущим правилам"""
        rules = applicable_rules(self.list_price_rules(), room.id, check_in, check_out)
        return resolve_price(room.base_price, rules, selected_rule_ids, check_in, check_out)

    def _set_room_status(self, room_id, status):
        room = self.session.get(Room, room_id)
        # выведенный из обслуживания номер меняют только вручную
        if room is None or room.status == RoomStatus.OUT_OF_SERVICE.code:
            return
        if room.status != status:
            logger.info('Статус номера %s: %s -> %s', room.number, room.status, status)
            room.status = status

    def add_booking(self, room, guest_name, check_in, check_out, phone='',
                    selected_rule_ids=None, notes='', status=None, **prices):
        """
        Создание бронирования

        Если снимок цены передан не полностью, он рассчитывается по правилам.
        Активная бронь переводит номер в статус occupied.
        """
        count_nights(check_in, check_out)
        if status is not None and status not in BookingStatus.codes():
            raise InvalidInput(f'Неизвестный статус бронирования: {status!r}')

        booking = Booking(
            room_id=room.id,
            guest_name=guest_name,
            phone=phone,
            check_in=check_in,
            check_out=check_out,
            status=status,
            selected_rule_ids=selected_rule_ids,
            notes=notes,
            **{name: prices.get(name) for name in PRICE_FIELDS}
        )
        if any(prices.get(name) is None for name in PRICE_FIELDS):
            booking.apply_quote(self.quote_for_stay(room, check_in, check_out, selected_rule_ids))

        self.session.add(booking)
        if booking.is_active:
            self._set_room_status(room.id, RoomStatus.OCCUPIED.code)

        self._commit()
        logger.info('Создано бронирование id=%s: номер %s, %s - %s, итого %s',
                    booking.id, room.number, check_in, check_out, booking.total_price)
        return booking

    def update_booking(self, booking, **fields):
        """
        Изменение бронирования

        Цена пересчитывается только если изменились даты или номер и новый
        снимок цены не передан. Переход в checked-out/cancelled освобождает номер.
        """
        previous_status = booking.status
        previous_key = (booking.room_id, booking.check_in, booking.check_out)

        for name in ('room_id', 'guest_name', 'phone', 'check_in', 'check_out',
                     'status', 'selected_rule_ids', 'notes'):
            if name in fields and fields[name] is not None:
                setattr(booking, name, fields[name])

        if booking.status not in BookingStatus.codes():
            raise InvalidInput(f'Неизвестный статус бронирования: {booking.status!r}')
        count_nights(booking.check_in, booking.check_out)

        room = self.get_room(booking.room_id)
        key_changed = previous_key != (booking.room_id, booking.check_in, booking.check_out)
        if all(fields.get(name) is not None for name in PRICE_FIELDS):
            for name in PRICE_FIELDS:
                setattr(booking, name, fields[name])
        elif key_changed:
            booking.apply_quote(self.quote_for_stay(room, booking.check_in, booking.check_out,
                                                    booking.selected_rule_ids))

        # активная бронь держала прежний номер: освобождаем именно его
        if previous_status == BookingStatus.ACTIVE.code and (
                not booking.is_active or previous_key[0] != booking.room_id):
            self._set_room_status(previous_key[0], RoomStatus.EMPTY.code)
        if booking.is_active:
            self._set_room_status(booking.room_id, RoomStatus.OCCUPIED.code)

        self._commit()
        logger.info('Бронирование id=%s обновлено (статус %s)', booking.id, booking.status)
        return booking

    # ---------- правила цен ----------

    def _validate_price_rule(self, rule):
        if rule.price_type not in PriceType.codes():
            raise InvalidInput(f'Неизвестный тип правила: {rule.price_type!r}')
        if rule.end_date < rule.start_date:
            raise InvalidInterval('Дата окончания правила раньше даты начала')
        if rule.room_id is not None:
            self.get_room(rule.room_id)

    def add_price_rule(self, start_date, end_date, price_value, price_type=None,
                       room_id=None, name=''):
        rule = PriceRule(start_date=start_date, end_date=end_date, price_value=price_value,
                         price_type=price_type, room_id=room_id, name=name)
        self._validate_price_rule(rule)

        self.session.add(rule)
        self._commit()
        logger.info('Создано правило цены id=%s (%s)', rule.id, rule.name)
        return rule

    def update_price_rule(self, rule, all_rooms=False, **fields):
        """Изменение правила; all_rooms=True переводит его на все номера"""
        for name in ('start_date', 'end_date', 'price_type', 'price_value', 'room_id', 'name'):
            if name in fields and fields[name] is not None:
                setattr(rule, name, fields[name])
        if all_rooms:
            rule.room_id = None

        with self.session.no_autoflush:
            self._validate_price_rule(rule)
        self._commit()
        logger.info('Правило цены id=%s обновлено', rule.id)
        return rule

    def delete_price_rule(self, rule):
        rule_id = rule.id
        self.session.delete(rule)
        self._commit()
        logger.info('Правило цены id=%s удалено', rule_id)
