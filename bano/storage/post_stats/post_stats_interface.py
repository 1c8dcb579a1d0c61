# bano/storage/post_stats/post_stats_interface.py

from typing import Optional, Protocol

from bano.schemas.post_stats import PostStatsOut


class IPostStatsRepository(Protocol):
    """
    帖子统计仓库接口：
    - 计数更新必须是存储层的原子自增 / 自减
    - 每次计数变化同时刷新帖子的 updated_at
    """

    def get_by_post_id(self, post_id: str) -> Optional[PostStatsOut]:
        ...

    def update_likes(self, post_id: str, step: int = 1) -> bool:
        """
        点赞数原子 +step，自减时不会低于 0
        - 返回是否真的有计数被修改
        """
        ...

    def update_comments(self, post_id: str, step: int = 1) -> bool:
        """
        评论数原子 +step，自减时不会低于 0
        """
        ...
