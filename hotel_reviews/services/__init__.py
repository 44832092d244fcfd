# Business Services
from hotel_reviews.services.feature_toggle_service import (
    FeatureResolver, RemoteFeatureResolver, LocalOverrideFeatureResolver,
    build_feature_resolver
)
from hotel_reviews.services.config_service import ConfigService
from hotel_reviews.services.review_service import ReviewService

__all__ = [
    'FeatureResolver', 'RemoteFeatureResolver', 'LocalOverrideFeatureResolver',
    'build_feature_resolver', 'ConfigService', 'ReviewService'
]
