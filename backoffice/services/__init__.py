from backoffice.services.pricing import PriceQuote, resolve_price
from backoffice.services.availability import (booking_conflicts, applicable_rules,
                                              is_room_available, find_available_rooms)
from backoffice.services.reports import occupancy_report

__all__ = [
    'PriceQuote', 'resolve_price',
    'booking_conflicts', 'applicable_rules', 'is_room_available', 'find_available_rooms',
    'occupancy_report'
]
