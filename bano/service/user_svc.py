from typing import Dict, Optional

from bano.schemas.user import UserCreate, UserOut, SessionOut
from bano.storage.user.user_interface import IUserRepository

from bano.core.logx import logger
from bano.core.exceptions import (
    UserNotFound,
    MissingFieldsError,
    ValidationError,
    EmailAlreadyExists,
    InvalidCredentials,
)
from bano.core.security import hash_password, verify_password


def register(
    user_repo: IUserRepository,
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
    to_dict: bool = True,
) -> Dict | SessionOut:
    """
    注册：
    1. 用户名 / 邮箱 / 密码都必须提供，邮箱需包含 @
    2. 邮箱不能已被注册
    3. 对明文密码做 Argon2 哈希后创建用户
    """
    if not username or not email or not password:
        raise MissingFieldsError("username, Email and password are required.")
    if "@" not in email:
        raise ValidationError("Invalid email.")

    if user_repo.get_user_by_email(email):
        raise EmailAlreadyExists()

    new_user = user_repo.create_user(
        UserCreate(username=username, email=email, password=hash_password(password))
    )
    logger.info(f"Registered user uid={new_user.uid}")

    session = SessionOut(username=new_user.username, user_id=new_user.uid)
    return session.model_dump(by_alias=True) if to_dict else session


def login(
    user_repo: IUserRepository,
    username: Optional[str],
    password: Optional[str],
    to_dict: bool = True,
) -> Dict | SessionOut:
    """
    登录：
    - 用户名不存在 → UserNotFound (404)
    - 密码不匹配 → InvalidCredentials (400)
    """
    if not username or not password:
        raise MissingFieldsError("Username and password are required.")

    user = user_repo.get_user_by_username(username)
    if not user:
        raise UserNotFound("User not found")

    if not verify_password(password, user.password):
        logger.warning(f"Login failed for uid={user.uid}: bad password")
        raise InvalidCredentials()

    logger.info(f"User uid={user.uid} logged in")
    session = SessionOut(username=user.username, user_id=user.uid)
    return session.model_dump(by_alias=True) if to_dict else session


def reset_password(
    user_repo: IUserRepository,
    username: Optional[str],
    email: Optional[str],
    new_password: Optional[str],
) -> bool:
    """
    找回密码：用户名 + 邮箱匹配后直接设置新密码（哈希后存储）
    """
    if not email or not username:
        raise MissingFieldsError("Email and username is required.")

    user = user_repo.get_user_by_username_and_email(username, email)
    if not user:
        # 与原接口一致：匹配失败返回 400 而不是 404
        raise ValidationError("User not found.")

    if not new_password:
        raise MissingFieldsError("new password is required.")

    ok = user_repo.update_password(user.uid, hash_password(new_password))
    if ok:
        logger.info(f"Password reset for uid={user.uid}")
    return ok


def get_user(user_repo: IUserRepository, uid: str, to_dict: bool = True) -> Dict | UserOut:
    """
    获取用户公开信息（不含密码哈希）
    """
    user = user_repo.get_user_by_uid(uid)
    if not user:
        raise UserNotFound()
    out = UserOut.model_validate(user)
    return out.model_dump(by_alias=True) if to_dict else out
