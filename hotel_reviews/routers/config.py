"""
评价配置路由
前缀: /api/config
"""
import logging
from fastapi import APIRouter, Depends, Query
from hotel_reviews.dependencies import ConfigServiceDep
from hotel_reviews.models.schemas import ReviewConfigResponse
from hotel_reviews.security.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["评价配置"], dependencies=[Depends(get_current_user)])


@router.get("/reviews", response_model=ReviewConfigResponse)
def get_review_config(service: ConfigServiceDep, hotel_id: int = Query(..., alias="hotelId", gt=0)):
    """获取酒店评价开关状态（供前端控制评价入口）"""
    logger.info(f"GET /api/config/reviews?hotelId={hotel_id}")
    return service.get_review_config(hotel_id)
