from sqlalchemy import Column, Integer, String, TIMESTAMP, Text, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from bano.models.base import Base
from bano.core.time import now_utc
import uuid


class Post(Base):
    """ 帖子表，存储帖子的标题、配文以及时间戳；图片、统计、点赞分别存放在独立的表中。

        CREATE TABLE IF NOT EXISTS posts (
            _id INT AUTO_INCREMENT PRIMARY KEY,           -- 系统主键ID（自增）
            pid VARCHAR(36) UNIQUE,                       -- 业务主键PID（UUID）
            author_id VARCHAR(36) NOT NULL,               -- 作者 ID (Fk->users.uid)
            title VARCHAR(255) NOT NULL,                  -- 标题
            caption TEXT NOT NULL,                        -- 配文
            created_at TIMESTAMP,                         -- 创建时间
            updated_at TIMESTAMP,                         -- 最近一次编辑 / 点赞 / 评论的时间

            FOREIGN KEY (author_id) REFERENCES users(uid)
        );

        -- 首页按 updated_at 倒序拉取
        CREATE INDEX idx_posts_updated_at ON posts (updated_at);
        CREATE INDEX idx_posts_author_id ON posts (author_id);
    """

    __tablename__ = "posts"

    # 系统主键：自增
    _id = Column(Integer, primary_key=True, autoincrement=True)  # 系统主键ID，系统用，不对外暴露
    # 业务主键：UUID
    pid = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))

    author_id = Column(String(36), ForeignKey("users.uid"), nullable=False)  # 帖子作者 ID
    title = Column(String(255), nullable=False)                              # 标题
    caption = Column(Text, nullable=False)                                   # 配文
    created_at = Column(TIMESTAMP(timezone=True), default=now_utc)
    updated_at = Column(TIMESTAMP(timezone=True), default=now_utc, onupdate=now_utc)

    # 反向引用：该帖子的作者
    author = relationship("User", back_populates="posts")
    # 单向引用：帖子图片（按 position 排序）
    images = relationship("PostImage", order_by="PostImage.position", cascade="all, delete-orphan")
    # 单向引用：该帖子的统计信息
    post_stats = relationship("PostStats", uselist=False, cascade="all, delete-orphan")
    # 单向引用：点赞集合
    likes = relationship("PostLike", cascade="all, delete-orphan")
    # 评论不做级联：帖子删除后评论保留（按 post_id 关联，而不是外键）

    __table_args__ = (
        UniqueConstraint('pid', name='unique_pid'),
        Index("idx_posts_author_id", "author_id"),
        Index("idx_posts_updated_at", "updated_at"),
    )


class PostImage(Base):
    """ 帖子图片表，保存图床返回的 public_id + url。

        CREATE TABLE IF NOT EXISTS post_images (
            _id INT AUTO_INCREMENT PRIMARY KEY,
            post_id VARCHAR(36) NOT NULL,                 -- 帖子 ID (FK -> posts.pid)
            position INT NOT NULL,                        -- 图片顺序
            public_id VARCHAR(255) NOT NULL,              -- 图床标识
            url VARCHAR(1024) NOT NULL,                   -- 访问地址
            FOREIGN KEY (post_id) REFERENCES posts(pid)
        );
    """

    __tablename__ = "post_images"

    _id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(36), ForeignKey("posts.pid"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    public_id = Column(String(255), nullable=False)
    url = Column(String(1024), nullable=False)

    __table_args__ = (
        Index("idx_post_images_post_id", "post_id"),
    )
