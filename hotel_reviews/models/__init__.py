# ORM Models
from hotel_reviews.models.entities import HotelType, Hotel, Room, Booking, Review

__all__ = ['HotelType', 'Hotel', 'Room', 'Booking', 'Review']
