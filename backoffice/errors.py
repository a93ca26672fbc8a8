"""
Ошибки бэк-офиса и их преобразование в JSON-ответы

Чистые расчёты (services) бросают InvalidInput / InvalidInterval,
хранилище бросает NotFound, модули - Conflict.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from backoffice import db

logger = logging.getLogger(__name__)


class BackofficeError(Exception):
    """Базовая ошибка приложения"""
    status_code = 400

    def __init__(self, message=''):
        super().__init__(message)
        self.message = message


class InvalidInput(BackofficeError):
    """Некорректные или отсутствующие данные (даты, число гостей и т.п.)"""
    status_code = 400


class InvalidInterval(InvalidInput):
    """Дата выезда не позже даты заезда (ночей <= 0)"""
    status_code = 400


class NotFound(BackofficeError):
    """Запись с указанным id отсутствует"""
    status_code = 404


class Conflict(BackofficeError):
    """Номер уже занят на выбранные даты"""
    status_code = 409


def register_error_handlers(app):
    """Регистрация обработчиков ошибок в приложении"""

    @app.errorhandler(BackofficeError)
    def handle_backoffice_error(error):
        # незафиксированные изменения после отказа отбрасываем
        db.session.rollback()
        logger.warning('%s: %s', type(error).__name__, error.message)
        return jsonify({'success': False, 'message': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code
