"""
评价服务异常定义

ResourceNotFoundError  - 实体不存在，或预订/房间、邮箱不匹配 (404)
DuplicateReviewError   - 该预订已有评价 (409)
FeatureDisabledError   - 全局或酒店类别开关关闭 (403)
InvalidReviewError     - 评分/评论超出范围，入库前拒绝 (400)
"""
from typing import Optional


class ReviewServiceError(Exception):
    """评价服务业务异常基类"""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(ReviewServiceError):
    code = "RESOURCE_NOT_FOUND"


class DuplicateReviewError(ReviewServiceError):
    code = "DUPLICATE_REVIEW"

    def __init__(self, booking_id: int, message: Optional[str] = None):
        self.booking_id = booking_id
        super().__init__(message or f"A review already exists for booking: {booking_id}")


class FeatureDisabledError(ReviewServiceError):
    code = "FEATURE_DISABLED"

    def __init__(self, scope: str, message: str):
        self.scope = scope
        super().__init__(message)


class InvalidReviewError(ReviewServiceError):
    code = "VALIDATION_ERROR"
