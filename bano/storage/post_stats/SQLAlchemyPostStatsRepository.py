# bano/storage/post_stats/SQLAlchemyPostStatsRepository.py

from typing import Optional

from sqlalchemy.orm import Session

from bano.models.post import Post
from bano.models.post_stats import PostStats
from bano.schemas.post_stats import PostStatsOut
from bano.storage.post_stats.post_stats_interface import IPostStatsRepository
from bano.core.db import transaction
from bano.core.time import now_utc


class SQLAlchemyPostStatsRepository(IPostStatsRepository):
    """
    使用 SQLAlchemy 实现的帖子统计仓库
    """

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(PostStats)

    def _get_stats_orm_by_post_id(self, post_id: str) -> Optional[PostStats]:
        return self._base_query().filter(PostStats.post_id == post_id).first()

    def get_by_post_id(self, post_id: str) -> Optional[PostStatsOut]:
        orm_obj = self._get_stats_orm_by_post_id(post_id)
        if orm_obj is not None:
            # 计数可能被其它会话的原子 UPDATE 改过
            self.db.refresh(orm_obj)
        return PostStatsOut.model_validate(orm_obj) if orm_obj else None

    def _apply_step(self, column, post_id: str, step: int) -> bool:
        """
        UPDATE post_stats SET <column> = <column> + step WHERE post_id = ? [AND <column> >= -step]
        同一事务里刷新 posts.updated_at，让被点赞 / 评论的帖子排到前面
        """
        q = self._base_query().filter(PostStats.post_id == post_id)
        if step < 0:
            q = q.filter(column >= -step)

        with transaction(self.db):
            affected = q.update({column: column + step}, synchronize_session=False)
            if affected:
                (
                    self.db.query(Post)
                    .filter(Post.pid == post_id)
                    .update({Post.updated_at: now_utc()}, synchronize_session=False)
                )

        return affected > 0

    def update_likes(self, post_id: str, step: int = 1) -> bool:
        return self._apply_step(PostStats.like_count, post_id, step)

    def update_comments(self, post_id: str, step: int = 1) -> bool:
        return self._apply_step(PostStats.comment_count, post_id, step)
