# bano/storage/like/SQLAlchemyLikeRepository.py

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bano.models.like import PostLike
from bano.storage.like.like_interface import ILikeRepository
from bano.core.db import transaction


class SQLAlchemyLikeRepository(ILikeRepository):
    """
    使用 SQLAlchemy 实现的点赞仓库
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self, post_id: str, user_id: str):
        return self.db.query(PostLike).filter(
            PostLike.post_id == post_id,
            PostLike.user_id == user_id,
        )

    def is_liked(self, post_id: str, user_id: str) -> bool:
        return self.db.query(self._query(post_id, user_id).exists()).scalar()

    def add_like(self, post_id: str, user_id: str) -> bool:
        like = PostLike(post_id=post_id, user_id=user_id)
        try:
            with transaction(self.db):
                self.db.add(like)
        except IntegrityError:
            # 唯一约束冲突：另一个请求已经写入了同一条点赞
            return False
        return True

    def remove_like(self, post_id: str, user_id: str) -> bool:
        with transaction(self.db):
            deleted = self._query(post_id, user_id).delete(synchronize_session=False)
        return deleted > 0

    def count_likes(self, post_id: str) -> int:
        return self.db.query(PostLike).filter(PostLike.post_id == post_id).count()
