from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, UniqueConstraint, Index
from bano.models.base import Base
from bano.core.time import now_utc


class PostLike(Base):
    """ 帖子点赞集合，一行代表「某用户当前点赞了某帖子」。

        CREATE TABLE IF NOT EXISTS post_likes (
            _id INT AUTO_INCREMENT PRIMARY KEY,
            post_id VARCHAR(36) NOT NULL,                    -- 帖子 ID (FK -> posts.pid)
            user_id VARCHAR(36) NOT NULL,                    -- 用户 ID
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,  -- 点赞时间

            CONSTRAINT uq_post_likes_post_user UNIQUE (post_id, user_id),
            FOREIGN KEY (post_id) REFERENCES posts(pid)
        );
    """

    __tablename__ = "post_likes"

    _id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(36), ForeignKey("posts.pid"), nullable=False)
    user_id = Column(String(36), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=now_utc)

    __table_args__ = (
        # 每个用户对同一帖子只能有一条点赞（集合语义）
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
        Index("idx_post_likes_user_id", "user_id"),
    )
