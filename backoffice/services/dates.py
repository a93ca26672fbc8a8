# Разбор дат из запросов и подсчёт ночей
from datetime import date, datetime, timedelta

from backoffice.errors import InvalidInput, InvalidInterval

# Формат дат в запросах и ответах API
DATE_FORMAT = '%Y-%m-%d'


def parse_date(value, field='date'):
    """Дата из строки YYYY-MM-DD (или уже готовый date/datetime)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise InvalidInput(f'Не указано поле {field}')
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidInput(f'Неверный формат даты в поле {field}: {value!r}')


def parse_optional_date(value, field='date'):
    if value is None or value == '':
        return None
    return parse_date(value, field)


def count_nights(check_in, check_out):
    """Число ночей в интервале [check_in, check_out); ошибка, если <= 0"""
    nights = (check_out - check_in).days
    if nights <= 0:
        raise InvalidInterval('Дата выезда должна быть позже даты заезда')
    return nights


def iter_days(start, count):
    """Дни start, start+1, ... (count штук)"""
    for offset in range(count):
        yield start + timedelta(days=offset)
