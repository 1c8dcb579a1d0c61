from sqlalchemy import Column, Integer, String, ForeignKey, Index, UniqueConstraint
from bano.models.base import Base


class PostStats(Base):
    """ 帖子统计表，存储帖子的点赞数、评论数。

        CREATE TABLE IF NOT EXISTS post_stats (
            _id INT AUTO_INCREMENT PRIMARY KEY,                -- 系统主键（自增）
            post_id VARCHAR(36) NOT NULL UNIQUE,               -- 帖子业务主键（FK -> posts.pid）
            like_count INT NOT NULL DEFAULT 0,                 -- 点赞数
            comment_count INT NOT NULL DEFAULT 0,              -- 评论数
            FOREIGN KEY (post_id) REFERENCES posts(pid)
        );

        计数只通过 UPDATE ... SET x = x + step 原子更新，
        评论数是独立计数，不是实时 COUNT(*)。
    """

    __tablename__ = "post_stats"

    _id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(36), ForeignKey("posts.pid"), nullable=False)
    like_count = Column(Integer, default=0, nullable=False)
    comment_count = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint('post_id', name='unique_post_stats_post_id'),
        Index("idx_post_stats_post_id", "post_id"),
    )
