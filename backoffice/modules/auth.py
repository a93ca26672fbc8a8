"""
Демо-вход в бэк-офис

Это не система безопасности: один логин/пароль из конфигурации
обменивается на постоянный токен, который остальные blueprint'ы проверяют
в заголовке Authorization.
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from backoffice.modules.common import get_json

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__, url_prefix='/auth')


def _request_token():
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip()
    return None


def require_token():
    """before_request для защищённых blueprint'ов"""
    if not current_app.config.get('AUTH_ENABLED', True):
        return None
    if _request_token() != current_app.config['DEMO_TOKEN']:
        logger.warning('Отказ в доступе: %s %s', request.method, request.path)
        return jsonify({'success': False, 'message': 'Требуется вход в систему'}), 401
    return None


@bp.post('/login')
def login():
    # Проверка демо-логина и выдача токена
    data = get_json()
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    if (username != current_app.config['DEMO_USERNAME']
            or password != current_app.config['DEMO_PASSWORD']):
        logger.warning('Неудачный вход пользователя %r', username)
        return jsonify({'success': False, 'message': 'Неверный логин или пароль'}), 401

    logger.info('Вход пользователя %s', username)
    return jsonify({'success': True, 'token': current_app.config['DEMO_TOKEN'], 'username': username})


@bp.post('/logout')
def logout():
    # Токен постоянный, клиенту достаточно его забыть
    return jsonify({'success': True})


@bp.get('/me')
def me():
    error = require_token()
    if error is not None:
        return error
    return jsonify({'success': True, 'username': current_app.config['DEMO_USERNAME']})
