from typing import Dict, Optional

from bano.schemas.comment import CommentCreate, CommentView
from bano.storage.user.user_interface import IUserRepository
from bano.storage.post.post_interface import IPostRepository
from bano.storage.comment.comment_interface import ICommentRepository
from bano.storage.post_stats.post_stats_interface import IPostStatsRepository
from bano.service.session_svc import ensure_owner

from bano.core.logx import logger
from bano.core.exceptions import (
    UserNotFound,
    PostNotFound,
    CommentNotFound,
    NotCommentAuthor,
    MissingFieldsError,
)


#---------------------------------------- 增 -----------------------------------------

def create_comment(
    user_repo: IUserRepository,
    post_repo: IPostRepository,
    comment_repo: ICommentRepository,
    stats_repo: IPostStatsRepository,
    author_id: str,
    post_id: str,
    text: Optional[str],
    to_dict: bool = True,
) -> Dict | CommentView:
    """
    创建评论（业务接口）：
    1. 评论内容不能为空
    2. 校验用户、帖子是否存在（失败时不动任何计数）
    3. 在 comments 表创建一条记录
    4. 评论写入成功后，再单独把 post_stats.comment_count + 1
    5. 返回 CommentView
    """
    # 1. 参数校验
    if not text or not text.strip():
        raise MissingFieldsError("Comment is required.")

    # 2. 校验用户 / 帖子
    if not user_repo.get_user_by_uid(author_id):
        raise UserNotFound()
    if not post_repo.get_post_record(post_id):
        raise PostNotFound()

    # 3. 创建评论
    cid = comment_repo.create_comment(
        CommentCreate(post_id=post_id, author_id=author_id, comment=text)
    )
    logger.info(f"Created comment cid={cid} on post={post_id} by author={author_id}")

    # 4. 评论数 +1（独立语句，和上一步不在一个事务里）
    stats_repo.update_comments(post_id=post_id, step=1)
    logger.info(f"Incremented comment_count for post_id={post_id}")

    # 5. 返回完整的评论信息
    comment_view = comment_repo.get_comment_view(cid)
    if not comment_view:
        raise CommentNotFound()

    return comment_view.model_dump(by_alias=True) if to_dict else comment_view


#---------------------------------------- 删 -----------------------------------------

def delete_comment(
    comment_repo: ICommentRepository,
    stats_repo: IPostStatsRepository,
    requester_id: str,
    cid: str,
) -> bool:
    """
    删除评论：
    1. 评论必须存在，且当前用户是评论作者
    2. 删除评论
    3. 删除成功后再把帖子的 comment_count - 1（帖子已不存在时不做任何事）
    """
    comment = comment_repo.get_comment_record(cid)
    if not comment:
        raise CommentNotFound()

    ensure_owner(requester_id, comment.author_id, NotCommentAuthor)

    ok = comment_repo.delete_comment(cid)
    if not ok:
        raise CommentNotFound()
    logger.info(f"Deleted comment cid={cid}")

    if not stats_repo.update_comments(post_id=comment.post_id, step=-1):
        logger.warning(f"comment_count not decremented for post_id={comment.post_id}")

    return True
