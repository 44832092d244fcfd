"""健康检查（无需认证）"""
from fastapi import APIRouter

from hotel_reviews.config import settings

router = APIRouter(tags=["健康检查"])


@router.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health")
def health_check():
    """健康检查"""
    return {"status": "UP"}
