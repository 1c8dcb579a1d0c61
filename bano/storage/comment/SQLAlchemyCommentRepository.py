# bano/storage/comment/SQLAlchemyCommentRepository.py

from typing import List, Optional

from sqlalchemy.orm import Session

from bano.models.comment import Comment
from bano.models.user import User
from bano.schemas.comment import CommentCreate, CommentRecord, CommentView
from bano.schemas.post import UserInfo
from bano.storage.comment.comment_interface import ICommentRepository
from bano.core.db import transaction


class SQLAlchemyCommentRepository(ICommentRepository):
    """
    使用 SQLAlchemy 实现的评论仓库
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------- 内部基础查询 ----------

    def _get_comment_orm(self, cid: str) -> Optional[Comment]:
        return self.db.query(Comment).filter(Comment.cid == cid).first()

    def _view_query(self):
        """
        评论视图查询：内连接作者，只取 _id + username
        """
        return (
            self.db.query(Comment, User.username)
            .join(User, User.uid == Comment.author_id)
        )

    @staticmethod
    def _to_view(row) -> CommentView:
        comment, username = row
        return CommentView(
            id=comment.cid,
            user_id=comment.author_id,
            user_info=UserInfo(id=comment.author_id, username=username),
            post_id=comment.post_id,
            comment=comment.comment,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    # ---------- 创建 ----------

    def create_comment(self, data: CommentCreate) -> str:
        comment = Comment(
            post_id=data.post_id,
            author_id=data.author_id,
            comment=data.comment,
        )

        with transaction(self.db):
            self.db.add(comment)

        self.db.refresh(comment)
        return comment.cid

    # ---------- 查询 ----------

    def get_comment_record(self, cid: str) -> Optional[CommentRecord]:
        comment = self._get_comment_orm(cid)
        return CommentRecord.model_validate(comment) if comment else None

    def get_comment_view(self, cid: str) -> Optional[CommentView]:
        row = self._view_query().filter(Comment.cid == cid).first()
        return self._to_view(row) if row else None

    def list_comment_views(self, post_id: str, page: int, page_size: int) -> List[CommentView]:
        rows = (
            self._view_query()
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment._id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return [self._to_view(row) for row in rows]

    def count_by_post(self, post_id: str) -> int:
        return self.db.query(Comment).filter(Comment.post_id == post_id).count()

    # ---------- 删除 ----------

    def delete_comment(self, cid: str) -> bool:
        comment = self._get_comment_orm(cid)
        if not comment:
            return False

        with transaction(self.db):
            self.db.delete(comment)

        return True
