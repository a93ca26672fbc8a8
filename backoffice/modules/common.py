# Общие помощники разбора запросов для blueprint'ов
from decimal import Decimal, InvalidOperation

from flask import request

from backoffice.errors import InvalidInput
from backoffice.models.price_rule import ALL_ROOMS


def get_json():
    """Тело запроса как словарь (пустой, если JSON нет)"""
    data = request.get_json(force=True, silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput('Ожидается JSON-объект')
    return data


def parse_int(value, field, required=True):
    if value is None or value == '':
        if required:
            raise InvalidInput(f'Поле {field} обязательно')
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f'Поле {field} должно быть целым числом: {value!r}')


def parse_decimal(value, field, required=True):
    if value is None or value == '':
        if required:
            raise InvalidInput(f'Поле {field} обязательно')
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise InvalidInput(f'Поле {field} должно быть числом: {value!r}')
    if not number.is_finite():
        raise InvalidInput(f'Поле {field} должно быть числом: {value!r}')
    return number


def parse_rule_ids(value):
    """Список id правил из JSON-массива или строки "1,2,3" (порядок сохраняется)"""
    if value is None or value == '':
        return []
    if isinstance(value, str):
        value = [part for part in value.split(',') if part.strip()]
    if not isinstance(value, (list, tuple)):
        raise InvalidInput('selected_rule_ids должен быть списком')
    return [parse_int(item, 'selected_rule_ids') for item in value]


def parse_room_scope(value):
    """room_id правила: "all" (или пусто) - все номера, иначе id номера"""
    if value is None or value == '' or value == ALL_ROOMS:
        return None
    return parse_int(value, 'room_id')
