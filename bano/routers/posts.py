from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from bano.schemas.post import PostView
from bano.schemas.like import LikeToggleOut
from bano.core.biz_response import BizResponse
from bano.service import post_svc, like_svc, feed_svc
from bano.routers.deps import get_current_uid, read_images

from bano.storage.database import (
    get_user_repo,
    get_post_repo,
    get_poststats_repo,
    get_like_repo,
    get_blob_store,
)
from bano.storage.user.user_interface import IUserRepository
from bano.storage.post.post_interface import IPostRepository
from bano.storage.post_stats.post_stats_interface import IPostStatsRepository
from bano.storage.like.like_interface import ILikeRepository
from bano.storage.blob.blob_interface import IBlobStore

from bano.core.exceptions import (
    ValidationError,
    UserNotFound,
    PostNotFound,
    NotPostOwner,
    BlobStoreError,
)
from bano.core.logx import logger

posts_router = APIRouter(prefix="/post", tags=["post"])


# --------------------------------- 创建帖子 ---------------------------------
@posts_router.post("/", response_model=PostView, status_code=201)
def create_post(
    title: Optional[str] = Form(default=None),
    caption: Optional[str] = Form(default=None),
    image_files: Optional[List[UploadFile]] = File(default=None, alias="imageFiles"),
    current_uid: str = Depends(get_current_uid),
    user_repo: IUserRepository = Depends(get_user_repo),
    post_repo: IPostRepository = Depends(get_post_repo),
    blob_store: IBlobStore = Depends(get_blob_store),
):
    """
    创建帖子（multipart）：
    - 最多 3 张图片，每张不超过 3MB
    - 图片先上传图床，再在一个事务里写 posts / post_images / post_stats
    """
    try:
        post = post_svc.create_post(
            user_repo=user_repo,
            post_repo=post_repo,
            blob_store=blob_store,
            author_id=current_uid,
            title=title,
            caption=caption,
            images=read_images(image_files),
            to_dict=True,
        )
        return BizResponse(data=post, status_code=201)
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except UserNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except BlobStoreError:
        return BizResponse(msg="Something went wrong while uploading image.", status_code=500)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while adding post.", status_code=500)


# --------------------------------- 帖子流 ---------------------------------
@posts_router.get("/all", response_model=List[PostView])
def list_posts(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    current_uid: str = Depends(get_current_uid),
    post_repo: IPostRepository = Depends(get_post_repo),
):
    """
    分页获取所有帖子（按最近更新倒序）
    """
    try:
        page_no, page_size = feed_svc.resolve_paging(page, limit)
        result = feed_svc.list_posts(
            post_repo=post_repo,
            viewer_id=current_uid,
            page=page_no,
            page_size=page_size,
            to_dict=True,
        )
        return BizResponse(data=result)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while getting posts.", status_code=500)


@posts_router.get("/by-userId", response_model=List[PostView])
def list_posts_by_user(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    current_uid: str = Depends(get_current_uid),
    post_repo: IPostRepository = Depends(get_post_repo),
):
    """
    分页获取某个用户的帖子，不传 userId 时取当前用户
    """
    try:
        page_no, page_size = feed_svc.resolve_paging(page, limit)
        result = feed_svc.list_posts(
            post_repo=post_repo,
            viewer_id=current_uid,
            page=page_no,
            page_size=page_size,
            author_id=user_id or current_uid,
            to_dict=True,
        )
        return BizResponse(data=result)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while getting posts by userId.", status_code=500)


# --------------------------------- 更新 / 删除 ---------------------------------
@posts_router.patch("/", response_model=PostView)
def update_post(
    post_id: Optional[str] = Form(default=None, alias="postId"),
    title: Optional[str] = Form(default=None),
    caption: Optional[str] = Form(default=None),
    image_files: Optional[List[UploadFile]] = File(default=None, alias="imageFiles"),
    current_uid: str = Depends(get_current_uid),
    user_repo: IUserRepository = Depends(get_user_repo),
    post_repo: IPostRepository = Depends(get_post_repo),
    blob_store: IBlobStore = Depends(get_blob_store),
):
    """
    作者更新帖子：带新图片时整体替换旧图片
    """
    try:
        post = post_svc.update_post(
            user_repo=user_repo,
            post_repo=post_repo,
            blob_store=blob_store,
            requester_id=current_uid,
            pid=post_id,
            title=title,
            caption=caption,
            images=read_images(image_files),
            to_dict=True,
        )
        return BizResponse(data=post)
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except NotPostOwner:
        return BizResponse(msg="You can only update your own posts.", status_code=403)
    except (PostNotFound, UserNotFound) as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while updating post.", status_code=500)


@posts_router.delete("/{pid}")
def delete_post(
    pid: str,
    current_uid: str = Depends(get_current_uid),
    post_repo: IPostRepository = Depends(get_post_repo),
    blob_store: IBlobStore = Depends(get_blob_store),
):
    """
    删除帖子：先删图床图片，全部成功后再删帖子记录
    """
    try:
        post_svc.delete_post(
            post_repo=post_repo,
            blob_store=blob_store,
            requester_id=current_uid,
            pid=pid,
        )
        return BizResponse(msg="Post deleted successfully.")
    except NotPostOwner:
        return BizResponse(msg="You can only delete your own posts.", status_code=403)
    except PostNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while deleting post.", status_code=500)


# --------------------------------- 点赞 ---------------------------------
@posts_router.post("/{pid}/likeUnlike", response_model=LikeToggleOut)
def like_unlike_post(
    pid: str,
    current_uid: str = Depends(get_current_uid),
    post_repo: IPostRepository = Depends(get_post_repo),
    like_repo: ILikeRepository = Depends(get_like_repo),
    stats_repo: IPostStatsRepository = Depends(get_poststats_repo),
):
    try:
        result = like_svc.toggle_like(
            post_repo=post_repo,
            like_repo=like_repo,
            stats_repo=stats_repo,
            post_id=pid,
            user_id=current_uid,
            to_dict=True,
        )
        return BizResponse(data=result)
    except PostNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while liking/unliking post.", status_code=500)
