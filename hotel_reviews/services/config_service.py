"""
评价配置服务
结合全局开关与酒店类别开关，给出某酒店是否允许写评价的判定
"""
import logging
from sqlalchemy.orm import Session

from hotel_reviews.exceptions import ResourceNotFoundError
from hotel_reviews.models.entities import Hotel, HotelType
from hotel_reviews.models.schemas import ReviewConfigResponse, ReviewScope
from hotel_reviews.repositories import ReviewRepository
from hotel_reviews.services.feature_toggle_service import FeatureResolver

logger = logging.getLogger(__name__)

REASON_DISABLED_GLOBALLY = "Reviews are currently disabled globally"
REASON_DISABLED_FOR_HOTEL_TYPE = "Reviews disabled for this hotel category"
REASON_ENABLED = "Reviews are enabled"


def evaluate_review_gate(feature_resolver: FeatureResolver, hotel_type: HotelType) -> ReviewConfigResponse:
    """
    两级开关判定，配置查询和评价写入共用

    先判断全局开关，再判断酒店类别开关；两者都关闭时报告 GLOBAL。
    """
    if not feature_resolver.is_globally_enabled():
        return ReviewConfigResponse(
            enabled=False, scope=ReviewScope.GLOBAL, reason=REASON_DISABLED_GLOBALLY
        )
    if not hotel_type.review_enabled:
        return ReviewConfigResponse(
            enabled=False, scope=ReviewScope.HOTEL_TYPE, reason=REASON_DISABLED_FOR_HOTEL_TYPE
        )
    return ReviewConfigResponse(enabled=True, scope=ReviewScope.ENABLED, reason=REASON_ENABLED)


def resolve_hotel_type(repository: ReviewRepository, hotel: Hotel) -> HotelType:
    """获取酒店所属类别"""
    hotel_type = repository.find_hotel_type(hotel.hotel_type_id)
    if not hotel_type:
        raise ResourceNotFoundError(f"Hotel type not found: {hotel.hotel_type_id}")
    return hotel_type


class ConfigService:
    """评价配置服务"""

    def __init__(self, db: Session, feature_resolver: FeatureResolver):
        self.repository = ReviewRepository(db)
        self.feature_resolver = feature_resolver

    def get_review_config(self, hotel_id: int) -> ReviewConfigResponse:
        """获取酒店的评价开关状态"""
        logger.debug(f"Fetching review config for hotelId: {hotel_id}")

        hotel = self.repository.find_hotel(hotel_id)
        if not hotel:
            raise ResourceNotFoundError(f"Hotel not found: {hotel_id}")

        hotel_type = resolve_hotel_type(self.repository, hotel)
        return evaluate_review_gate(self.feature_resolver, hotel_type)
