from datetime import timedelta
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, InvalidHashError
from jose import JWTError, jwt

from bano.core.config import settings
from bano.core.time import now_utc

# 可以全局复用一个实例
pwd_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """
    使用 Argon2 对明文密码进行哈希
    """
    return pwd_hasher.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    校验明文密码是否匹配哈希
    """
    try:
        pwd_hasher.verify(hashed_password, plain_password)
        return True
    except (VerifyMismatchError, InvalidHashError):
        return False


def token_max_age_seconds() -> int:
    return settings.TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def create_access_token(user_id: str) -> str:
    """
    签发会话令牌：
    - claim `id` 为用户业务主键 uid
    - 过期时间 TOKEN_EXPIRE_DAYS 天
    """
    expire = now_utc() + timedelta(days=settings.TOKEN_EXPIRE_DAYS)
    payload = {"id": user_id, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """
    解析会话令牌，返回 uid；签名错误、过期、缺少 id 时返回 None
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("id")
    if not user_id:
        return None
    return str(user_id)
