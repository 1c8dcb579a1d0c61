from typing import Optional

from bano.storage.user.user_interface import IUserRepository

from bano.core.security import decode_access_token
from bano.core.exceptions import UnauthorizedError, ForbiddenError
from bano.core.logx import logger


def authenticate(user_repo: IUserRepository, token: Optional[str]) -> str:
    """
    会话校验：把 cookie 中的令牌解析为 uid
    1. 令牌缺失 / 签名错误 / 过期 / 缺少 id → UnauthorizedError
    2. 令牌对应的用户已不存在 → UnauthorizedError
    不产生任何副作用
    """
    if not token:
        raise UnauthorizedError()

    uid = decode_access_token(token)
    if not uid:
        logger.warning("Rejected session: invalid or expired token")
        raise UnauthorizedError()

    user = user_repo.get_user_by_uid(uid)
    if not user:
        logger.warning(f"Rejected session: user {uid} no longer exists")
        raise UnauthorizedError()

    return user.uid


def ensure_owner(requester_id: str, owner_id: str, error: type[ForbiddenError] = ForbiddenError) -> None:
    """
    归属校验：当前用户必须是资源的所有者
    """
    if requester_id != owner_id:
        logger.warning(f"User {requester_id} denied on resource owned by {owner_id}")
        raise error()
