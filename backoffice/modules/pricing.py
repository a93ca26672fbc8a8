"""
Модуль правил динамического ценообразования

Функционал:
- CRUD правил цен (для конкретного номера или для всех номеров)
- Расчёт цены номера по выбранным правилам (quote)
"""
from flask import Blueprint, current_app, jsonify, request

from backoffice.errors import InvalidInput
from backoffice.models.price_rule import ALL_ROOMS
from backoffice.modules.auth import require_token
from backoffice.modules.common import (get_json, parse_decimal, parse_int,
                                       parse_room_scope, parse_rule_ids)
from backoffice.services.availability import applicable_rules, rule_covers_room
from backoffice.services.dates import parse_date, parse_optional_date
from backoffice.services.pricing import resolve_price
from backoffice.store import get_store

bp = Blueprint('pricing', __name__, url_prefix='/pricing')
bp.before_request(require_token)


@bp.get('/rules')
def list_rules():
    # Правила "для всех номеров" идут первыми
    room_filter = request.args.get('room_id', '')
    rules = get_store().list_price_rules()
    if room_filter == ALL_ROOMS:
        rules = [rule for rule in rules if rule.applies_to_all_rooms]
    elif room_filter:
        room_id = parse_int(room_filter, 'room_id')
        rules = [rule for rule in rules if rule_covers_room(rule, room_id)]

    rules.sort(key=lambda rule: (not rule.applies_to_all_rooms, rule.id))
    return jsonify([rule.to_dict() for rule in rules])


@bp.post('/rules')
def create_rule():
    data = get_json()
    name = (data.get('name') or '').strip()
    if not name:
        raise InvalidInput('Поле name обязательно')

    rule = get_store().add_price_rule(
        start_date=parse_date(data.get('start_date'), 'start_date'),
        end_date=parse_date(data.get('end_date'), 'end_date'),
        price_type=data.get('price_type') or None,
        price_value=parse_decimal(data.get('price_value'), 'price_value'),
        room_id=parse_room_scope(data.get('room_id')),
        name=name,
    )
    return jsonify(rule.to_dict()), 201


@bp.get('/rules/<int:rule_id>')
def get_rule(rule_id):
    return jsonify(get_store().get_price_rule(rule_id).to_dict())


@bp.put('/rules/<int:rule_id>')
def update_rule(rule_id):
    store = get_store()
    rule = store.get_price_rule(rule_id)
    data = get_json()

    room_id = parse_room_scope(data.get('room_id')) if 'room_id' in data else None
    rule = store.update_price_rule(
        rule,
        all_rooms='room_id' in data and room_id is None,
        start_date=parse_optional_date(data.get('start_date'), 'start_date'),
        end_date=parse_optional_date(data.get('end_date'), 'end_date'),
        price_type=data.get('price_type'),
        price_value=parse_decimal(data.get('price_value'), 'price_value', required=False),
        room_id=room_id,
        name=data.get('name'),
    )
    return jsonify(rule.to_dict())


@bp.delete('/rules/<int:rule_id>')
def delete_rule(rule_id):
    store = get_store()
    store.delete_price_rule(store.get_price_rule(rule_id))
    return jsonify({'success': True})


@bp.get('/quote')
def quote():
    """
    Цена номера по правилам
    ?room_id=1&check_in=2024-06-01&check_out=2024-06-04&rules=2,1
    Без дат выбранные правила применяются один раз к базовой цене,
    без выбора возвращается базовая цена.
    """
    store = get_store()
    room = store.get_room(parse_int(request.args.get('room_id'), 'room_id'))
    check_in = parse_optional_date(request.args.get('check_in'), 'check_in')
    check_out = parse_optional_date(request.args.get('check_out'), 'check_out')
    selected = parse_rule_ids(request.args.get('rules'))

    if check_in is not None and check_out is not None:
        rules = applicable_rules(store.list_price_rules(), room.id, check_in, check_out)
    else:
        rules = [rule for rule in store.list_price_rules() if rule_covers_room(rule, room.id)]

    data = resolve_price(room.base_price, rules, selected, check_in, check_out).to_dict()
    data['room_id'] = room.id
    data['currency'] = current_app.config['CURRENCY']
    data['applicable_rules'] = [rule.to_dict() for rule in rules]
    return jsonify(data)
