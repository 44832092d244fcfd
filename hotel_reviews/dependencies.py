from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from hotel_reviews.database import get_db
from hotel_reviews.services.config_service import ConfigService
from hotel_reviews.services.feature_toggle_service import FeatureResolver
from hotel_reviews.services.review_service import ReviewService


def get_feature_resolver(request: Request) -> FeatureResolver:
    return request.app.state.feature_resolver


FeatureResolverDep = Annotated[FeatureResolver, Depends(get_feature_resolver)]


def get_review_service(
    resolver: FeatureResolverDep,
    db: Session = Depends(get_db),
) -> ReviewService:
    return ReviewService(db, resolver)


def get_config_service(
    resolver: FeatureResolverDep,
    db: Session = Depends(get_db),
) -> ConfigService:
    return ConfigService(db, resolver)


ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
ConfigServiceDep = Annotated[ConfigService, Depends(get_config_service)]
