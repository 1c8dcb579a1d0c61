from typing import List, Optional

from fastapi import APIRouter, Depends

from bano.schemas.comment import CommentIn, CommentView
from bano.core.biz_response import BizResponse
from bano.service import comment_svc, feed_svc
from bano.routers.deps import get_current_uid

from bano.storage.database import (
    get_user_repo,
    get_post_repo,
    get_comment_repo,
    get_poststats_repo,
)
from bano.storage.user.user_interface import IUserRepository
from bano.storage.post.post_interface import IPostRepository
from bano.storage.comment.comment_interface import ICommentRepository
from bano.storage.post_stats.post_stats_interface import IPostStatsRepository

from bano.core.exceptions import (
    ValidationError,
    UserNotFound,
    PostNotFound,
    CommentNotFound,
    NotCommentAuthor,
)
from bano.core.logx import logger

comments_router = APIRouter(prefix="/comment", tags=["comment"])


@comments_router.post("/{post_id}", response_model=CommentView)
def create_comment(
    post_id: str,
    payload: CommentIn,
    current_uid: str = Depends(get_current_uid),
    user_repo: IUserRepository = Depends(get_user_repo),
    post_repo: IPostRepository = Depends(get_post_repo),
    comment_repo: ICommentRepository = Depends(get_comment_repo),
    stats_repo: IPostStatsRepository = Depends(get_poststats_repo),
):
    """
    创建评论：
    - 校验用户、帖子是否存在
    - 创建评论后再单独把帖子评论数 +1
    """
    try:
        new_comment = comment_svc.create_comment(
            user_repo=user_repo,
            post_repo=post_repo,
            comment_repo=comment_repo,
            stats_repo=stats_repo,
            author_id=current_uid,
            post_id=post_id,
            text=payload.comment,
            to_dict=True,
        )
        return BizResponse(data=new_comment)
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except (UserNotFound, PostNotFound) as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception:
        logger.exception("create_comment error")
        return BizResponse(msg="Something went wrong while adding comment.", status_code=500)


@comments_router.get("/{post_id}", response_model=List[CommentView])
def list_comments(
    post_id: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    current_uid: str = Depends(get_current_uid),
    comment_repo: ICommentRepository = Depends(get_comment_repo),
):
    """
    分页获取帖子评论（最新的在前）
    """
    try:
        page_no, page_size = feed_svc.resolve_paging(page, limit)
        result = feed_svc.list_comments(
            comment_repo=comment_repo,
            post_id=post_id,
            page=page_no,
            page_size=page_size,
            to_dict=True,
        )
        return BizResponse(data=result)
    except Exception:
        logger.exception("list_comments error")
        return BizResponse(msg="Something went wrong while getting comments.", status_code=500)


@comments_router.delete("/{cid}")
def delete_comment(
    cid: str,
    current_uid: str = Depends(get_current_uid),
    comment_repo: ICommentRepository = Depends(get_comment_repo),
    stats_repo: IPostStatsRepository = Depends(get_poststats_repo),
):
    try:
        comment_svc.delete_comment(
            comment_repo=comment_repo,
            stats_repo=stats_repo,
            requester_id=current_uid,
            cid=cid,
        )
        return BizResponse(msg="Comment deleted successfully.")
    except NotCommentAuthor as e:
        return BizResponse(msg=e.message, status_code=403)
    except CommentNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception:
        logger.exception("delete_comment error")
        return BizResponse(msg="Something went wrong while deleting comment.", status_code=500)
