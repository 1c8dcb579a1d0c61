# bano/storage/comment/comment_interface.py

from typing import List, Optional, Protocol

from bano.schemas.comment import CommentCreate, CommentRecord, CommentView


class ICommentRepository(Protocol):
    """
    评论仓库接口协议
    """

    def create_comment(self, data: CommentCreate) -> str:
        """
        创建评论（只写 comments 表，不动帖子的 comment_count）
        - 返回评论业务主键 cid
        """
        ...

    def get_comment_record(self, cid: str) -> Optional[CommentRecord]:
        ...

    def get_comment_view(self, cid: str) -> Optional[CommentView]:
        ...

    def list_comment_views(self, post_id: str, page: int, page_size: int) -> List[CommentView]:
        """
        分页获取某帖子的评论：
        - 按 created_at 倒序
        - 作者已不存在的评论不返回
        """
        ...

    def delete_comment(self, cid: str) -> bool:
        ...

    def count_by_post(self, post_id: str) -> int:
        """
        评论的实际行数，用于核对 comment_count
        """
        ...
