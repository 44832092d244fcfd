"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict
from pydantic import BaseModel, EmailStr, Field, ConfigDict


class ReviewScope(str, Enum):
    """评价开关判定结果的作用域"""
    GLOBAL = "GLOBAL"          # 全局关闭
    HOTEL_TYPE = "HOTEL_TYPE"  # 酒店类别关闭
    ENABLED = "ENABLED"        # 开启


# ============== 评价 Schemas ==============

class ReviewCreate(BaseModel):
    room_id: int = Field(..., gt=0)
    booking_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)
    reviewer_email: EmailStr
    reviewer_name: Optional[str] = Field(None, max_length=200)


class ReviewResponse(BaseModel):
    review_id: int
    room_id: int
    booking_id: int
    rating: int
    comment: Optional[str] = None
    reviewer_email: Optional[str] = None
    reviewer_name: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ReviewPage(BaseModel):
    items: List[ReviewResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int


class ReviewStatsResponse(BaseModel):
    room_id: int
    total_reviews: int
    average_rating: Optional[float] = None
    rating_distribution: Dict[int, int]


# ============== 配置 Schemas ==============

class ReviewConfigResponse(BaseModel):
    enabled: bool
    scope: ReviewScope
    reason: str


# ============== 错误 Schemas ==============

class ErrorResponse(BaseModel):
    code: str
    message: str
    timestamp: datetime
