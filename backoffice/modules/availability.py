"""
Поиск свободных номеров по датам

GET /availability/?start=2024-06-01&end=2024-06-04&pax=2&rules=3,1
"""
import logging

from flask import Blueprint, jsonify, request

from backoffice.errors import InvalidInput
from backoffice.modules.auth import require_token
from backoffice.modules.common import parse_rule_ids
from backoffice.services.availability import find_available_rooms
from backoffice.services.dates import parse_date
from backoffice.store import get_store

logger = logging.getLogger(__name__)

bp = Blueprint('availability', __name__, url_prefix='/availability')
bp.before_request(require_token)


@bp.get('/')
def search():
    """Свободные номера с рассчитанной ценой и применимыми правилами"""
    start = request.args.get('start')
    end = request.args.get('end')
    pax = request.args.get('pax')
    if not start or not end or not pax:
        raise InvalidInput('Нужны параметры start, end и pax')

    check_in = parse_date(start, 'start')
    check_out = parse_date(end, 'end')

    # Снимок данных берём до расчёта, дальше считаем без обращения к базе
    store = get_store()
    rooms = find_available_rooms(
        store.list_rooms(),
        store.list_bookings(),
        store.list_price_rules(),
        check_in,
        check_out,
        pax,
        selected_rule_ids=parse_rule_ids(request.args.get('rules')),
    )
    logger.debug('Свободных номеров на %s - %s: %d', check_in, check_out, len(rooms))
    return jsonify(rooms)
