import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from config import config

# Инициализация расширений
db = SQLAlchemy()


def configure_logging(app):
    """Настройка логирования (консоль, уровень из конфигурации)"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    logging.getLogger('backoffice').setLevel(level)


def create_app(config_name='default'):
    """Фабрика приложений Flask"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Инициализация расширений с приложением
    db.init_app(app)

    from backoffice.errors import register_error_handlers
    from backoffice.store import RowStore

    register_error_handlers(app)

    # Хранилище передаётся явно через app.extensions, а не модульным синглтоном
    app.extensions['row_store'] = RowStore(db.session)

    # Регистрация blueprint'ов
    with app.app_context():
        from backoffice.modules import auth, rooms, bookings, pricing, availability, reports

        app.register_blueprint(auth.bp)
        app.register_blueprint(rooms.bp)
        app.register_blueprint(bookings.bp)
        app.register_blueprint(pricing.bp)
        app.register_blueprint(availability.bp)
        app.register_blueprint(reports.bp)

        # Создание таблиц базы данных
        db.create_all()

    logging.getLogger(__name__).info('Приложение создано (конфигурация: %s)', config_name)
    return app
