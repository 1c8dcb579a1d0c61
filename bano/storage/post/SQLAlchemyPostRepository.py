from typing import List, Optional

from sqlalchemy import exists, literal
from sqlalchemy.orm import Session, selectinload

from bano.models.post import Post, PostImage
from bano.models.post_stats import PostStats
from bano.models.like import PostLike
from bano.models.user import User
from bano.schemas.media import MediaOut
from bano.schemas.post import PostCreate, PostUpdate, PostRecord, PostView, UserInfo
from bano.storage.post.post_interface import IPostRepository
from bano.core.db import transaction
from bano.core.time import now_utc


class SQLAlchemyPostRepository(IPostRepository):
    """
    使用 SQLAlchemy 实现的帖子仓库
    业务层依赖 IPostRepository 抽象接口
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------- 内部基础查询 ----------

    def _get_post_orm(self, pid: str) -> Optional[Post]:
        return self.db.query(Post).filter(Post.pid == pid).first()

    def _view_query(self, viewer_id: Optional[str]):
        """
        帖子视图查询：
        - 左连接作者（作者不存在时 userInfo 为空，帖子照常展示）
        - 左连接统计表
        - isLiked 针对当前访问者计算
        """
        if viewer_id:
            is_liked = exists().where(
                PostLike.post_id == Post.pid,
                PostLike.user_id == viewer_id,
            )
        else:
            is_liked = literal(False)

        return (
            self.db.query(
                Post,
                User.uid,
                User.username,
                PostStats.like_count,
                PostStats.comment_count,
                is_liked.label("is_liked"),
            )
            .outerjoin(User, User.uid == Post.author_id)
            .outerjoin(PostStats, PostStats.post_id == Post.pid)
            .options(selectinload(Post.images))
        )

    @staticmethod
    def _to_view(row) -> PostView:
        post, uid, username, like_count, comment_count, is_liked = row
        user_info = UserInfo(id=uid, username=username) if uid else None
        return PostView(
            id=post.pid,
            user_info=user_info,
            title=post.title,
            caption=post.caption,
            images=[MediaOut.model_validate(img) for img in post.images],
            is_liked=bool(is_liked),
            likes_count=like_count or 0,
            comments_count=comment_count or 0,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    # ---------- 创建 ----------

    def create_post(self, data: PostCreate) -> str:
        """
        在同一事务中创建 posts、图片记录与清零的统计记录，返回 pid
        """
        post = Post(author_id=data.author_id, title=data.title, caption=data.caption)
        post.images = [
            PostImage(position=i, public_id=img.public_id, url=img.url)
            for i, img in enumerate(data.images)
        ]
        post.post_stats = PostStats(like_count=0, comment_count=0)

        with transaction(self.db):
            self.db.add(post)

        # 刷新以获取 pid
        self.db.refresh(post)
        return post.pid

    # ---------- 查询 ----------

    def get_post_record(self, pid: str) -> Optional[PostRecord]:
        post = self._get_post_orm(pid)
        if not post:
            return None
        return PostRecord.model_validate(post)

    def get_post_view(self, pid: str, viewer_id: Optional[str] = None) -> Optional[PostView]:
        row = self._view_query(viewer_id).filter(Post.pid == pid).first()
        if not row:
            return None
        return self._to_view(row)

    def list_post_views(
        self,
        viewer_id: Optional[str],
        page: int,
        page_size: int,
        author_id: Optional[str] = None,
    ) -> List[PostView]:
        base_q = self._view_query(viewer_id)
        if author_id is not None:
            base_q = base_q.filter(Post.author_id == author_id)

        rows = (
            base_q
            .order_by(Post.updated_at.desc(), Post._id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return [self._to_view(row) for row in rows]

    # ---------- 更新 / 删除 ----------

    def update_post(self, pid: str, data: PostUpdate) -> bool:
        post = self._get_post_orm(pid)
        if not post:
            return False

        with transaction(self.db):
            if data.title is not None:
                post.title = data.title
            if data.caption is not None:
                post.caption = data.caption
            if data.images is not None:
                # delete-orphan 会删除旧图片记录
                post.images = [
                    PostImage(position=i, public_id=img.public_id, url=img.url)
                    for i, img in enumerate(data.images)
                ]
            # 只换图片时 posts 行本身不会被 UPDATE，这里显式刷新
            post.updated_at = now_utc()

        return True

    def delete_post(self, pid: str) -> bool:
        """
        硬删除：posts + post_images + post_stats + post_likes
        评论按 post_id 关联，不会被删除
        """
        post = self._get_post_orm(pid)
        if not post:
            return False

        with transaction(self.db):
            self.db.delete(post)

        return True
