"""
Проверка доступности номеров и применимости правил цен

Алгоритм поиска свободных номеров:
1. Отбираем номера по вместимости и статусу (out-of-service не предлагаем)
2. Для каждого номера ищем пересечения с активными бронированиями
3. Для свободных номеров подбираем правила цен и считаем стоимость

Все функции чистые: данные (номера, брони, правила) передаются снимком,
в базу ничего не пишется.
"""
from backoffice.errors import InvalidInput
from backoffice.models.booking import BookingStatus
from backoffice.models.room import RoomStatus
from backoffice.services.dates import count_nights
from backoffice.services.pricing import resolve_price

# Статусы номеров, которые вообще можно предлагать гостям
BOOKABLE_ROOM_STATUSES = (RoomStatus.EMPTY.code, RoomStatus.OCCUPIED.code)


def booking_conflicts(booking_start, booking_end, request_start, request_end):
    """
    Пересекается ли бронь [booking_start, booking_end) с запросом [request_start, request_end)

    Конфликт, если бронь начинается внутри запроса, заканчивается внутри
    запроса или целиком его покрывает.
    """
    return (
        (request_start <= booking_start < request_end)
        or (request_start < booking_end <= request_end)
        or (booking_start <= request_start and booking_end >= request_end)
    )


def rule_overlaps_stay(rule, stay_start, stay_end):
    """Тот же тест пересечения для правила цены, но с закрытыми интервалами"""
    return (
        (stay_start <= rule.start_date <= stay_end)
        or (stay_start <= rule.end_date <= stay_end)
        or (rule.start_date <= stay_start and rule.end_date >= stay_end)
    )


def rule_covers_room(rule, room_id):
    return rule.room_id is None or rule.room_id == room_id


def applicable_rules(rules, room_id, stay_start, stay_end):
    """Правила для номера (или для всех номеров), пересекающие период проживания"""
    return [
        rule for rule in rules
        if rule_covers_room(rule, room_id) and rule_overlaps_stay(rule, stay_start, stay_end)
    ]


def is_room_candidate(room, guest_count):
    """Номер подходит по вместимости и не выведен из обслуживания"""
    return room.capacity >= guest_count and room.status in BOOKABLE_ROOM_STATUSES


def is_room_available(room, bookings, check_in, check_out, exclude_booking_id=None):
    """
    Проверка доступности номера на период

    Args:
        room: номер
        bookings: бронирования (учитываются только активные брони этого номера)
        check_in (date): Дата заезда
        check_out (date): Дата выезда
        exclude_booking_id: бронь, которую не учитываем (при её же изменении)

    Returns:
        bool: True если номер свободен
    """
    count_nights(check_in, check_out)

    for booking in bookings:
        if booking.room_id != room.id or booking.status != BookingStatus.ACTIVE.code:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if booking_conflicts(booking.check_in, booking.check_out, check_in, check_out):
            return False
    return True


def validate_guest_count(value):
    try:
        guest_count = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f'Неверное число гостей: {value!r}')
    if guest_count <= 0:
        raise InvalidInput('Число гостей должно быть положительным')
    return guest_count


def find_available_rooms(rooms, bookings, rules, check_in, check_out, guest_count,
                         selected_rule_ids=None):
    """
    Поиск свободных номеров с расчётом цены

    Возвращает список словарей номеров (в исходном порядке rooms), дополненных
    полями price_per_night, nights, total_price и applicable_rules.
    """
    count_nights(check_in, check_out)
    guest_count = validate_guest_count(guest_count)

    result = []
    for room in rooms:
        if not is_room_candidate(room, guest_count):
            continue
        if not is_room_available(room, bookings, check_in, check_out):
            continue

        room_rules = applicable_rules(rules, room.id, check_in, check_out)
        quote = resolve_price(room.base_price, room_rules, selected_rule_ids, check_in, check_out)

        data = room.to_dict()
        data.update(quote.to_dict())
        data['applicable_rules'] = [rule.to_dict() for rule in room_rules]
        result.append(data)

    return result
