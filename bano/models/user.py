from sqlalchemy import Column, Integer, String, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid
from bano.models.base import Base
from bano.core.time import now_utc


class User(Base):
    """ 用户模型，对应数据库中的 users 表。

        CREATE TABLE IF NOT EXISTS users (
            _id INT AUTO_INCREMENT PRIMARY KEY,        -- 系统主键 ID
            uid VARCHAR(36) UNIQUE,                   -- 用户的业务主键（UUID）
            username VARCHAR(100) NOT NULL,           -- 用户名（不强制唯一）
            email VARCHAR(100) UNIQUE NOT NULL,       -- 邮箱
            password VARCHAR(255) NOT NULL,           -- 密码哈希
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,    -- 创建时间
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP     -- 更新时间
        );
    """

    __tablename__ = "users"
    # 系统主键：自增
    _id = Column(Integer, primary_key=True, autoincrement=True)  # 系统主键ID，系统用，不对外暴露
    # 业务主键：UUID，唯一且不自增
    uid = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), nullable=False, index=True)  # 用户名
    email = Column(String(100), nullable=False)  # 用户邮箱
    password = Column(String(255), nullable=False)  # 密码哈希
    created_at = Column(TIMESTAMP(timezone=True), default=now_utc)  # 创建时间
    updated_at = Column(TIMESTAMP(timezone=True), default=now_utc, onupdate=now_utc)  # 更新时间

    # 反向引用：该用户的所有帖子
    posts = relationship("Post", back_populates="author")

    __table_args__ = (
        UniqueConstraint("uid", name="unique_uid"),
        UniqueConstraint("email", name="unique_email"),
    )
