"""
全局评价开关服务

两层配置读取：
1. 本地覆盖开启 -> 恒为开启，不访问远程 (LocalOverrideFeatureResolver)
2. 否则读取 AWS SSM Parameter Store 中的参数 (RemoteFeatureResolver)

读取失败一律按"关闭"处理 (fail-closed)，异常不向上抛出。
每次调用都重新读取，不做缓存。
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from hotel_reviews.config import Settings

logger = logging.getLogger(__name__)


class FlagSource(Protocol):
    """远程开关数据源：按名称取值，不存在返回 None，传输失败可抛异常"""

    def get_flag(self, name: str) -> Optional[str]:
        ...


class ParameterStoreFlagSource:
    """基于 AWS SSM Parameter Store 的开关数据源"""

    def __init__(self, client=None, region_name: str = "us-east-1",
                 connect_timeout: float = 2.0, read_timeout: float = 3.0):
        if client is None:
            client = boto3.client(
                "ssm",
                region_name=region_name,
                config=BotoConfig(
                    connect_timeout=connect_timeout,
                    read_timeout=read_timeout,
                    retries={"max_attempts": 1},
                ),
            )
        self._client = client

    def get_flag(self, name: str) -> Optional[str]:
        try:
            result = self._client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ParameterNotFound":
                return None
            raise
        return result["Parameter"]["Value"]


def parse_flag_value(value: Optional[str]) -> bool:
    """仅 "true"（忽略大小写）视为开启，带空白等其他值均视为关闭"""
    if value is None:
        return False
    return value.lower() == "true"


class FeatureResolver(ABC):
    """全局评价开关"""

    @abstractmethod
    def is_globally_enabled(self) -> bool:
        """全局是否允许写评价，永不抛异常"""


class LocalOverrideFeatureResolver(FeatureResolver):
    """本地覆盖：恒为开启"""

    def is_globally_enabled(self) -> bool:
        logger.info("Using local override: global write review enabled = true")
        return True


class RemoteFeatureResolver(FeatureResolver):
    """从远程数据源读取全局开关，单次读取，不重试"""

    def __init__(self, flag_source: FlagSource, flag_name: str):
        self.flag_source = flag_source
        self.flag_name = flag_name

    def is_globally_enabled(self) -> bool:
        try:
            value = self.flag_source.get_flag(self.flag_name)
        except Exception:
            logger.exception(
                f"Error fetching parameter {self.flag_name}, defaulting to false"
            )
            return False

        if value is None:
            logger.warning(f"Parameter {self.flag_name} not found, defaulting to false")
            return False

        enabled = parse_flag_value(value)
        logger.debug(f"Global write review enabled: {enabled}")
        return enabled


def build_feature_resolver(settings: Settings, flag_source: Optional[FlagSource] = None) -> FeatureResolver:
    """根据配置选择开关实现（构造时决定，调用方无需判断）"""
    if settings.FEATURE_TOGGLE_LOCAL_OVERRIDE:
        return LocalOverrideFeatureResolver()

    if flag_source is None:
        flag_source = ParameterStoreFlagSource(
            region_name=settings.AWS_REGION,
            connect_timeout=settings.FLAG_CONNECT_TIMEOUT,
            read_timeout=settings.FLAG_READ_TIMEOUT,
        )
    return RemoteFeatureResolver(flag_source, settings.REVIEW_GLOBAL_FLAG_NAME)
