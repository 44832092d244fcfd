# API Routers
from hotel_reviews.routers import reviews, config, health

__all__ = ['reviews', 'config', 'health']
