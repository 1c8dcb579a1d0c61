# bano/storage/like/like_interface.py

from typing import Protocol


class ILikeRepository(Protocol):
    """
    帖子点赞集合仓库：
    - (post_id, user_id) 在存储层唯一，集合语义由唯一约束保证
    """

    def is_liked(self, post_id: str, user_id: str) -> bool:
        ...

    def add_like(self, post_id: str, user_id: str) -> bool:
        """
        加入点赞集合
        - 返回 True：本次新增
        - 返回 False：已经在集合中（包括并发请求先一步写入的情况）
        """
        ...

    def remove_like(self, post_id: str, user_id: str) -> bool:
        """
        移出点赞集合，返回是否真的删除了记录
        """
        ...

    def count_likes(self, post_id: str) -> int:
        """
        集合的实际大小，用于核对 like_count
        """
        ...
