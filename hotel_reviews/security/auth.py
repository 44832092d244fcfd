"""
认证模块
所有 /api 接口使用 HTTP Basic 认证，凭证来自应用配置
"""
import bcrypt
import logging
import secrets
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from hotel_reviews.config import settings

logger = logging.getLogger(__name__)

security = HTTPBasic()


def get_password_hash(password: str) -> str:
    """密码哈希"""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        logger.error("Configured API_PASSWORD_HASH is not a valid bcrypt hash")
        return False


def _check_password(password: str) -> bool:
    if settings.API_PASSWORD_HASH:
        return verify_password(password, settings.API_PASSWORD_HASH)
    return secrets.compare_digest(password.encode('utf-8'), settings.API_PASSWORD.encode('utf-8'))


async def get_current_user(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """校验 Basic 凭证，返回用户名"""
    username_ok = secrets.compare_digest(
        credentials.username.encode('utf-8'), settings.API_USERNAME.encode('utf-8')
    )
    password_ok = _check_password(credentials.password)

    if not (username_ok and password_ok):
        logger.warning(f"Authentication failed for user: {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="无效的认证凭证",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
