from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bano.models.user import User
from bano.schemas.user import UserCreate, UserOut, UserAllOut
from bano.storage.user.user_interface import IUserRepository
from bano.core.db import transaction
from bano.core.exceptions import EmailAlreadyExists


class SQLAlchemyUserRepository(IUserRepository):
    """
    使用 SQLAlchemy 实现的用户仓库
    """

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(User)

    def get_user_by_uid(self, uid: str) -> Optional[UserAllOut]:
        user = self._base_query().filter(User.uid == uid).first()
        return UserAllOut.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserAllOut]:
        user = (
            self._base_query()
            .filter(User.username == username)
            .order_by(User._id.asc())
            .first()
        )
        return UserAllOut.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserAllOut]:
        user = self._base_query().filter(User.email == email).first()
        return UserAllOut.model_validate(user) if user else None

    def get_user_by_username_and_email(self, username: str, email: str) -> Optional[UserAllOut]:
        user = (
            self._base_query()
            .filter(User.username == username, User.email == email)
            .first()
        )
        return UserAllOut.model_validate(user) if user else None

    def create_user(self, user_data: UserCreate) -> UserOut:
        """
        创建用户
        - 假定 user_data.password 已经是加密后的哈希
        """
        user = User(**user_data.model_dump())

        try:
            with transaction(self.db):
                self.db.add(user)
        except IntegrityError as e:
            # 并发注册同一邮箱时由唯一约束兜底
            raise EmailAlreadyExists() from e

        # 提交完成之后再 refresh，拿到 uid 等默认值
        self.db.refresh(user)
        return UserOut.model_validate(user)

    def update_password(self, uid: str, hashed_password: str) -> bool:
        user = self._base_query().filter(User.uid == uid).first()
        if not user:
            return False

        with transaction(self.db):
            user.password = hashed_password

        return True
