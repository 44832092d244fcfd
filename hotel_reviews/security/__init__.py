# Security module
from hotel_reviews.security.auth import (
    get_password_hash, verify_password, get_current_user
)

__all__ = ['get_password_hash', 'verify_password', 'get_current_user']
