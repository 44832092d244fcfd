"""
评价路由
前缀: /api/reviews
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from hotel_reviews.dependencies import ReviewServiceDep
from hotel_reviews.models.schemas import (
    ReviewCreate, ReviewResponse, ReviewPage, ReviewStatsResponse
)
from hotel_reviews.security.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["评价"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(data: ReviewCreate, service: ReviewServiceDep):
    """提交评价（每个预订仅可评价一次）"""
    logger.info(f"POST /api/reviews - Creating review for roomId: {data.room_id}")
    return service.create_review(
        room_id=data.room_id,
        booking_id=data.booking_id,
        rating=data.rating,
        comment=data.comment,
        reviewer_email=data.reviewer_email,
        reviewer_name=data.reviewer_name,
    )


@router.get("/room/{room_id}", response_model=ReviewPage)
def list_room_reviews(
    service: ReviewServiceDep,
    room_id: int = Path(..., gt=0),
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
):
    """
    分页获取房间评价

    sortBy 格式 "field,direction"，如 "createdAt,desc" 或 "rating,asc"；
    默认按创建时间倒序
    """
    logger.info(f"GET /api/reviews/room/{room_id} - page: {page}, size: {size}, sortBy: {sort_by}")
    return service.get_reviews_by_room(room_id, page, size, sort_by)


@router.get("/stats/{room_id}", response_model=ReviewStatsResponse)
def get_room_review_stats(service: ReviewServiceDep, room_id: int = Path(..., gt=0)):
    """房间评价统计"""
    logger.info(f"GET /api/reviews/stats/{room_id}")
    return service.get_review_stats(room_id)
