import os
from pathlib import Path

# Базовая директория проекта
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Базовая конфигурация приложения"""

    # Секретный ключ для Flask (в продакшене заменить на безопасный)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Конфигурация базы данных SQLite (хранилище номеров, броней и правил цен)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{BASE_DIR / "backoffice.db"}'

    # Отключаем отслеживание изменений (экономит память)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Валюта цен (отдаётся в расчётах цены и отчётах)
    CURRENCY = os.environ.get('CURRENCY') or 'USD'

    # Демо-вход (не система безопасности, а флаг-токен)
    DEMO_USERNAME = os.environ.get('DEMO_USERNAME') or 'admin'
    DEMO_PASSWORD = os.environ.get('DEMO_PASSWORD') or 'admin'
    DEMO_TOKEN = os.environ.get('DEMO_TOKEN') or 'demo-jwt-token'
    AUTH_ENABLED = os.environ.get('AUTH_ENABLED', '1') not in ('0', 'false', 'False')

    # Уровень логирования
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class DevelopmentConfig(Config):
    """Конфигурация для разработки"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'DEBUG'


class TestingConfig(Config):
    """Конфигурация для тестов (база в памяти)"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    """Конфигурация для продакшена"""
    DEBUG = False


# Словарь конфигураций
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
