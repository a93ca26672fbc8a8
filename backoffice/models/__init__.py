from backoffice.models.room import Room, RoomType, RoomStatus
from backoffice.models.booking import Booking, BookingStatus
from backoffice.models.price_rule import PriceRule, PriceType, ALL_ROOMS

__all__ = [
    'Room', 'RoomType', 'RoomStatus',
    'Booking', 'BookingStatus',
    'PriceRule', 'PriceType', 'ALL_ROOMS'
]
