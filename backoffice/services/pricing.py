"""
Расчёт цены проживания по правилам динамического ценообразования

Цена считается по дням: для каждой ночи берётся базовая цена номера и к ней
по порядку применяются правила, действующие в этот день:
- fixed: цена дня заменяется значением правила
- percentage: цена дня умножается на (1 + value / 100), проценты складываются сложно

Итог за проживание - точная сумма по дням (округлённая до копеек),
цена за ночь - среднее по дням.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from backoffice.errors import InvalidInput
from backoffice.models.price_rule import PriceType
from backoffice.services.dates import count_nights, iter_days

CENT = Decimal('0.01')


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class PriceQuote:
    """Результат расчёта цены"""
    base_price: Decimal
    price_per_night: Decimal
    nights: Optional[int] = None
    total_price: Optional[Decimal] = None
    applied_rule_ids: List[int] = field(default_factory=list)

    def to_dict(self):
        return {
            'base_price': float(self.base_price),
            'price_per_night': float(self.price_per_night),
            'nights': self.nights,
            'total_price': float(self.total_price) if self.total_price is not None else None,
            'applied_rule_ids': list(self.applied_rule_ids),
        }


def order_rules(rules, selected_rule_ids=None):
    """
    Правила в порядке применения

    Если есть явный выбор - только выбранные правила в порядке выбора
    (неизвестные id молча пропускаются). Без выбора - все переданные правила
    в исходном порядке.
    """
    if not selected_rule_ids:
        return list(rules)

    by_id = {rule.id: rule for rule in rules}
    return [by_id[rule_id] for rule_id in selected_rule_ids if rule_id in by_id]


def rule_active_on(rule, day):
    return rule.start_date <= day <= rule.end_date


def apply_rule(price, rule):
    """Применить одно правило к текущей цене"""
    value = Decimal(str(rule.price_value))
    if rule.price_type == PriceType.FIXED.code:
        return value
    if rule.price_type == PriceType.PERCENTAGE.code:
        return price * (1 + value / 100)
    return price


def price_for_day(base_price, ordered_rules, day):
    """Цена одной ночи и id правил, которые на неё повлияли"""
    price = base_price
    applied = []
    for rule in ordered_rules:
        if rule_active_on(rule, day):
            price = apply_rule(price, rule)
            applied.append(rule.id)
    return price, applied


def resolve_price(base_price, rules, selected_rule_ids=None, check_in=None, check_out=None):
    """
    Цена номера за проживание

    Args:
        base_price: базовая цена номера за ночь
        rules: правила-кандидаты (уже отфильтрованные по номеру и периоду)
        selected_rule_ids: явно выбранные правила в порядке применения
        check_in, check_out (date): период проживания; без дат выбранные
            правила применяются один раз к базовой цене, без выбора - базовая цена

    Returns:
        PriceQuote
    """
    base_price = Decimal(str(base_price))

    if check_in is None and check_out is None:
        # без дат применяется только явный выбор правил
        ordered = order_rules(rules, selected_rule_ids) if selected_rule_ids else []
        price = base_price
        for rule in ordered:
            price = apply_rule(price, rule)
        return PriceQuote(
            base_price=to_money(base_price),
            price_per_night=to_money(price),
            applied_rule_ids=[rule.id for rule in ordered],
        )

    if check_in is None or check_out is None:
        raise InvalidInput('Нужны обе даты: заезда и выезда')

    nights = count_nights(check_in, check_out)
    ordered = order_rules(rules, selected_rule_ids)

    total_sum = Decimal('0')
    applied_ids = []
    for day in iter_days(check_in, nights):
        day_price, applied = price_for_day(base_price, ordered, day)
        total_sum += day_price
        for rule_id in applied:
            if rule_id not in applied_ids:
                applied_ids.append(rule_id)

    return PriceQuote(
        base_price=to_money(base_price),
        price_per_night=to_money(total_sum / nights),
        nights=nights,
        total_price=to_money(total_sum),
        applied_rule_ids=applied_ids,
    )
