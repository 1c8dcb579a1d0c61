import re
from typing import Dict, List, Optional, Tuple

from bano.schemas.comment import CommentView
from bano.schemas.post import PostView
from bano.storage.post.post_interface import IPostRepository
from bano.storage.comment.comment_interface import ICommentRepository

from bano.core.config import settings

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
# OFFSET 必须落在 64 位有符号整数内
_MAX_OFFSET = 2 ** 62


def _positive_int(value: Optional[str], default: int) -> int:
    """
    与前端约定的宽松解析（同 parseInt(x) || default）：
    - 取开头的整数部分，"2abc" → 2，"1.5" → 1
    - 缺失 / 非数字 / 非正数时取默认值
    """
    match = _LEADING_INT_RE.match(value or "")
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def resolve_paging(page: Optional[str], limit: Optional[str]) -> Tuple[int, int]:
    """
    把查询参数解析为 (page, page_size)：
    - page 从 1 开始，超大页码收敛到偏移量上限（结果为空列表）
    - page_size 不超过 MAX_PAGE_SIZE
    """
    page_size = min(_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
    page_no = min(_positive_int(page, 1), _MAX_OFFSET // page_size + 1)
    return page_no, page_size


def list_posts(
    post_repo: IPostRepository,
    viewer_id: Optional[str],
    page: int = 1,
    page_size: int = 10,
    author_id: Optional[str] = None,
    to_dict: bool = True,
) -> List[Dict] | List[PostView]:
    """
    帖子流：
    - 按 updated_at 倒序（最近被编辑 / 点赞 / 评论的排前面）
    - 偏移分页，超出末尾返回空列表
    - isLiked 针对 viewer_id 计算
    - author_id 不为空时只返回该作者的帖子
    """
    posts = post_repo.list_post_views(
        viewer_id=viewer_id,
        page=page,
        page_size=page_size,
        author_id=author_id,
    )
    return [p.model_dump(by_alias=True) for p in posts] if to_dict else posts


def list_comments(
    comment_repo: ICommentRepository,
    post_id: str,
    page: int = 1,
    page_size: int = 10,
    to_dict: bool = True,
) -> List[Dict] | List[CommentView]:
    """
    评论列表：按 created_at 倒序，偏移分页
    """
    comments = comment_repo.list_comment_views(post_id=post_id, page=page, page_size=page_size)
    return [c.model_dump(by_alias=True) for c in comments] if to_dict else comments
