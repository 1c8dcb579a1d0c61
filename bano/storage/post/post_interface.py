# bano/storage/post/post_interface.py

from typing import List, Optional, Protocol

from bano.schemas.post import PostCreate, PostUpdate, PostRecord, PostView


class IPostRepository(Protocol):
    """
    帖子仓库接口协议（数据层抽象接口）
    业务层依赖本接口，而不是具体实现，方便后续替换为不同数据源
    """

    def create_post(self, data: PostCreate) -> str:
        """
        创建帖子（写 posts + post_images，不写统计表）
        - 返回新帖子的业务主键 pid
        """
        ...

    def get_post_record(self, pid: str) -> Optional[PostRecord]:
        """
        取帖子基础信息（作者、图片），用于归属校验与图片清理
        """
        ...

    def get_post_view(self, pid: str, viewer_id: Optional[str] = None) -> Optional[PostView]:
        ...

    def list_post_views(
        self,
        viewer_id: Optional[str],
        page: int,
        page_size: int,
        author_id: Optional[str] = None,
    ) -> List[PostView]:
        """
        分页获取帖子视图：
        - 按 updated_at 倒序
        - page 从 1 开始，skip = (page - 1) * page_size
        - author_id 不为空时只看该作者
        """
        ...

    def update_post(self, pid: str, data: PostUpdate) -> bool:
        """
        更新标题 / 配文 / 图片（None 字段不修改）
        """
        ...

    def delete_post(self, pid: str) -> bool:
        """
        硬删除帖子（连同图片、统计、点赞记录；评论不级联）
        """
        ...
