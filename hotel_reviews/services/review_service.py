"""
评价服务
- 评价写入准入：引用完整性、预订归属、唯一性、两级开关
- 房间评价分页查询（受限字段排序）
- 房间评价统计（数量、平均分、1~5 分分布）
"""
import logging
import math
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotel_reviews.exceptions import (
    ResourceNotFoundError, DuplicateReviewError, FeatureDisabledError, InvalidReviewError
)
from hotel_reviews.models.entities import Booking, Review, Room
from hotel_reviews.models.schemas import (
    ReviewResponse, ReviewPage, ReviewStatsResponse, ReviewScope
)
from hotel_reviews.repositories import ReviewRepository, SortOrder, SORTABLE_COLUMNS
from hotel_reviews.services.config_service import evaluate_review_gate, resolve_hotel_type
from hotel_reviews.services.feature_toggle_service import FeatureResolver

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000

DEFAULT_ORDER: List[SortOrder] = [("createdAt", "desc")]


def parse_sort(sort_by: Optional[str]) -> List[SortOrder]:
    """
    解析排序参数 "field,direction"

    字段仅支持 createdAt / rating；方向 asc（忽略大小写）为升序，其余均为降序。
    格式错误或字段不支持时使用默认排序（创建时间倒序），不报错。
    按 rating 排序时追加创建时间倒序作为次级排序。
    """
    if not sort_by:
        return list(DEFAULT_ORDER)

    parts = sort_by.split(",")
    if len(parts) != 2:
        logger.warning(
            f"Invalid sortBy format: {sort_by}. Expected format: 'field,direction'. Using default sort."
        )
        return list(DEFAULT_ORDER)

    field = parts[0].strip()
    direction = "asc" if parts[1].strip().lower() == "asc" else "desc"

    if field not in SORTABLE_COLUMNS:
        logger.warning(
            f"Invalid sort field: {field}, allowed fields are 'createdAt' or 'rating'. Using default sort."
        )
        return list(DEFAULT_ORDER)

    if field == "rating":
        return [("rating", direction), ("createdAt", "desc")]
    return [(field, direction)]


def round_rating(value: Optional[float]) -> Optional[float]:
    """平均分保留两位小数：floor(x * 100 + 0.5) / 100，按浮点值计算"""
    if value is None:
        return None
    return math.floor(value * 100 + 0.5) / 100


def to_review_response(review: Review, booking: Optional[Booking]) -> ReviewResponse:
    """评价视图，评价人信息取自预订；预订不存在时留空"""
    return ReviewResponse(
        review_id=review.id,
        room_id=review.room_id,
        booking_id=review.booking_id,
        rating=review.rating,
        comment=review.comment,
        reviewer_email=booking.guest_email if booking else None,
        reviewer_name=booking.guest_name if booking else None,
        created_at=review.created_at,
    )


class ReviewService:
    """评价服务"""

    def __init__(self, db: Session, feature_resolver: FeatureResolver):
        self.repository = ReviewRepository(db)
        self.feature_resolver = feature_resolver

    def _get_room(self, room_id: int) -> Room:
        room = self.repository.find_room(room_id)
        if not room:
            raise ResourceNotFoundError(f"Room not found: {room_id}")
        return room

    # ============== 写入 ==============

    def create_review(self, room_id: int, booking_id: int, rating: int,
                      comment: Optional[str], reviewer_email: str,
                      reviewer_name: Optional[str] = None) -> ReviewResponse:
        """
        创建评价

        按顺序校验，任一步失败即终止且不写入：
        房间 -> 预订 -> 预订归属房间 -> 评价人邮箱 -> 重复评价
        -> 酒店 -> 酒店类别 -> 全局开关 -> 类别开关

        reviewer_name 只用于请求校验，展示的评价人信息始终取自预订。
        """
        logger.info(f"Creating review for roomId: {room_id}, bookingId: {booking_id}")

        if rating is None or not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidReviewError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
            raise InvalidReviewError(f"Comment must not exceed {MAX_COMMENT_LENGTH} characters")

        room = self._get_room(room_id)

        booking = self.repository.find_booking(booking_id)
        if not booking:
            raise ResourceNotFoundError(f"Booking not found: {booking_id}")

        if booking.room_id != room_id:
            raise ResourceNotFoundError("Booking does not belong to the specified room")

        if (booking.guest_email or "").lower() != (reviewer_email or "").lower():
            raise ResourceNotFoundError("Reviewer email does not match booking guest email")

        if self.repository.exists_review_for_booking(booking_id):
            raise DuplicateReviewError(booking_id)

        hotel = self.repository.find_hotel(room.hotel_id)
        if not hotel:
            raise ResourceNotFoundError(f"Hotel not found: {room.hotel_id}")

        hotel_type = resolve_hotel_type(self.repository, hotel)

        gate = evaluate_review_gate(self.feature_resolver, hotel_type)
        if not gate.enabled:
            if gate.scope == ReviewScope.GLOBAL:
                logger.warning("Write review feature is globally disabled")
            else:
                logger.warning(f"Write review feature is disabled for hotel type: {hotel_type.id}")
            raise FeatureDisabledError(gate.scope.value, gate.reason)

        review = Review(
            room_id=room_id,
            booking_id=booking_id,
            rating=rating,
            comment=comment,
        )
        try:
            saved = self.repository.save_review(review)
        except IntegrityError:
            # 并发写入时由唯一约束兜底
            if self.repository.exists_review_for_booking(booking_id):
                logger.warning(f"Concurrent duplicate review rejected for bookingId: {booking_id}")
                raise DuplicateReviewError(booking_id)
            raise

        logger.info(f"Review created successfully with id: {saved.id}")
        return to_review_response(saved, booking)

    # ============== 查询 ==============

    def get_reviews_by_room(self, room_id: int, page: int = 0, size: int = 10,
                            sort_by: Optional[str] = None) -> ReviewPage:
        """分页获取房间评价"""
        logger.debug(f"Fetching reviews for roomId: {room_id}, page: {page}, size: {size}, sortBy: {sort_by}")

        if page < 0:
            raise InvalidReviewError("Page index must not be negative")
        if size < 1:
            raise InvalidReviewError("Page size must be at least 1")

        self._get_room(room_id)

        reviews, total = self.repository.page_reviews_by_room(room_id, page, size, parse_sort(sort_by))
        items = [
            to_review_response(review, self.repository.find_booking(review.booking_id))
            for review in reviews
        ]
        return ReviewPage(
            items=items,
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if total else 0,
        )

    def get_review_stats(self, room_id: int) -> ReviewStatsResponse:
        """房间评价统计"""
        logger.debug(f"Fetching review stats for roomId: {room_id}")

        self._get_room(room_id)

        total_reviews = self.repository.count_reviews_by_room(room_id)
        average = self.repository.avg_rating_by_room(room_id) if total_reviews else None

        distribution = {
            rating: self.repository.count_reviews_by_room_and_rating(room_id, rating)
            for rating in range(MIN_RATING, MAX_RATING + 1)
        }

        return ReviewStatsResponse(
            room_id=room_id,
            total_reviews=total_reviews,
            average_rating=round_rating(average),
            rating_distribution=distribution,
        )
