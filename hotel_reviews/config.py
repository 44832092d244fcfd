"""
应用配置
从环境变量 / .env 读取配置，包括全局评价开关所在的 Parameter Store 参数
"""
from typing import List, Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Review Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./reviews.db"

    # 全局评价开关 (AWS SSM Parameter Store)
    REVIEW_GLOBAL_FLAG_NAME: str = "/review-system/global/write-review-enabled"
    AWS_REGION: str = "us-east-1"
    FLAG_CONNECT_TIMEOUT: float = 2.0
    FLAG_READ_TIMEOUT: float = 3.0

    # 本地覆盖：离线/测试环境下直接视为开启，不访问远程参数
    FEATURE_TOGGLE_LOCAL_OVERRIDE: bool = False

    # HTTP Basic 认证
    API_USERNAME: str = "admin"
    API_PASSWORD: str = "admin"
    API_PASSWORD_HASH: Optional[str] = None  # bcrypt，设置后优先使用

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# 全局设置实例
settings = Settings()
