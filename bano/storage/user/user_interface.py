# bano/storage/user/user_interface.py

from typing import Optional, Protocol

from bano.schemas.user import UserCreate, UserOut, UserAllOut


class IUserRepository(Protocol):
    """
    用户仓库接口协议（数据层抽象接口）
    业务层依赖本接口，而不是具体实现
    """

    def get_user_by_uid(self, uid: str) -> Optional[UserAllOut]:
        ...

    def get_user_by_username(self, username: str) -> Optional[UserAllOut]:
        """
        用户名不强制唯一，登录时取最早注册的那一个
        """
        ...

    def get_user_by_email(self, email: str) -> Optional[UserAllOut]:
        ...

    def get_user_by_username_and_email(self, username: str, email: str) -> Optional[UserAllOut]:
        ...

    def create_user(self, user_data: UserCreate) -> UserOut:
        """
        创建用户，password 需为哈希
        """
        ...

    def update_password(self, uid: str, hashed_password: str) -> bool:
        ...
