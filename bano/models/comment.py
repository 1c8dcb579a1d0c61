from sqlalchemy import Column, Integer, String, TIMESTAMP, Text, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
import uuid
from bano.models.base import Base
from bano.core.time import now_utc


class Comment(Base):
    """ 评论表。

        CREATE TABLE IF NOT EXISTS comments (
            _id INT AUTO_INCREMENT PRIMARY KEY,               -- 系统主键（自增）
            cid VARCHAR(36) NOT NULL UNIQUE,                  -- 业务主键（UUID，对外使用）
            post_id VARCHAR(36) NOT NULL,                     -- 所属帖子 PID（不建外键，删除帖子不级联）
            author_id VARCHAR(36) NOT NULL,                   -- 评论作者 UID（FK -> users.uid）
            comment TEXT NOT NULL,                            -- 评论正文
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,

            FOREIGN KEY (author_id) REFERENCES users(uid)
        );
    """

    __tablename__ = "comments"

    _id = Column(Integer, primary_key=True, autoincrement=True)
    cid = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    post_id = Column(String(36), nullable=False)
    author_id = Column(String(36), ForeignKey("users.uid"), nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=now_utc)
    updated_at = Column(TIMESTAMP(timezone=True), default=now_utc, onupdate=now_utc)

    # 反向引用：评论作者
    author = relationship("User")

    __table_args__ = (
        UniqueConstraint('cid', name='unique_cid'),
        Index("idx_comments_post_created", "post_id", "created_at"),
        Index("idx_comments_author", "author_id"),
    )
