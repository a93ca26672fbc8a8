from datetime import date

from flask import Blueprint, current_app, jsonify, request

from backoffice.modules.auth import require_token
from backoffice.services.dates import parse_date
from backoffice.services.reports import occupancy_report
from backoffice.store import get_store

bp = Blueprint('reports', __name__, url_prefix='/reports')
bp.before_request(require_token)


@bp.get('/<period>')
def report(period):
    # Отчёт о загрузке: daily / weekly / monthly, дата по умолчанию - сегодня
    date_arg = request.args.get('date')
    report_date = parse_date(date_arg, 'date') if date_arg else date.today()

    store = get_store()
    data = occupancy_report(period, report_date, store.list_rooms(), store.list_bookings())
    data['currency'] = current_app.config['CURRENCY']
    return jsonify(data)
