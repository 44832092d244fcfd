"""
酒店评价服务主应用入口
"""
import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hotel_reviews.config import settings
from hotel_reviews.database import init_db
from hotel_reviews.handlers import register_exception_handlers
from hotel_reviews.routers import reviews, config, health
from hotel_reviews.services.feature_toggle_service import build_feature_resolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)

    # 初始化数据库
    init_db()

    # 全局开关实现在启动时选定
    app.state.feature_resolver = build_feature_resolver(settings)
    logger.info(
        f"Feature resolver: {type(app.state.feature_resolver).__name__} "
        f"(local override = {settings.FEATURE_TOGGLE_LOCAL_OVERRIDE})"
    )

    yield


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="酒店预订评价服务：评价写入准入、房间评价查询与统计、评价开关配置",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 注册路由
app.include_router(health.router)
app.include_router(reviews.router)
app.include_router(config.router)
