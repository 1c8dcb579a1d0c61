from typing import Dict, List, Optional

from bano.schemas.media import ImageUpload, MediaOut
from bano.schemas.post import PostCreate, PostUpdate, PostView
from bano.storage.user.user_interface import IUserRepository
from bano.storage.post.post_interface import IPostRepository
from bano.storage.blob.blob_interface import IBlobStore
from bano.service.session_svc import ensure_owner

from bano.core.config import settings
from bano.core.logx import logger
from bano.core.exceptions import (
    UserNotFound,
    PostNotFound,
    NotPostOwner,
    MissingFieldsError,
    TooManyImagesError,
    ImageTooLargeError,
)


def _validate_images(images: List[ImageUpload]) -> None:
    """
    图片数量不超过 MAX_IMAGES，单张不超过 MAX_IMAGE_BYTES
    """
    if len(images) > settings.MAX_IMAGES:
        raise TooManyImagesError(settings.MAX_IMAGES)
    for image in images:
        if len(image.data) > settings.MAX_IMAGE_BYTES:
            raise ImageTooLargeError(settings.MAX_IMAGE_BYTES)


def _upload_images(blob_store: IBlobStore, images: List[ImageUpload]) -> List[MediaOut]:
    """
    逐张上传，任意一张失败即抛 BlobStoreError
    已上传成功的图片不会回收
    """
    uploaded: List[MediaOut] = []
    for image in images:
        media = blob_store.upload(image.data, image.filename, image.content_type)
        uploaded.append(media)
    return uploaded


def _delete_images(blob_store: IBlobStore, images: List[MediaOut]) -> None:
    """
    逐张删除，任意一张失败即抛 BlobStoreError
    已删除的图片不会恢复
    """
    for image in images:
        blob_store.delete(image.public_id)


#---------------------------------------- 增 -----------------------------------------
def create_post(
    user_repo: IUserRepository,
    post_repo: IPostRepository,
    blob_store: IBlobStore,
    author_id: str,
    title: Optional[str],
    caption: Optional[str],
    images: Optional[List[ImageUpload]],
    to_dict: bool = True,
) -> Dict | PostView:
    """
    创建帖子（业务接口）：
    1. 标题 / 配文 / 图片都必须提供，并校验图片数量与大小
    2. 查看 用户ID 是否存在
    3. 逐张上传图片到图床
    4. 在同一事务中创建 posts / post_images / post_stats 记录（计数为 0）
    5. 返回作者视角的 PostView（isLiked=False）
    """
    # 1. 参数校验
    if not title or not caption or not images:
        raise MissingFieldsError()
    _validate_images(images)

    # 2. 查看 用户ID 是否存在
    user = user_repo.get_user_by_uid(author_id)
    if not user:
        raise UserNotFound()

    # 3. 上传图片
    media = _upload_images(blob_store, images)
    logger.info(f"Uploaded {len(media)} images for author={author_id}")

    # 4. 创建帖子记录
    pid = post_repo.create_post(
        PostCreate(author_id=author_id, title=title, caption=caption, images=media)
    )
    logger.info(f"Created post pid={pid} for author={author_id}")

    # 5. 返回完整视图
    post_view = post_repo.get_post_view(pid, viewer_id=author_id)
    if not post_view:
        raise PostNotFound()

    return post_view.model_dump(by_alias=True) if to_dict else post_view


#------------------------------------ 改 / 删 ---------------------------------------

def update_post(
    user_repo: IUserRepository,
    post_repo: IPostRepository,
    blob_store: IBlobStore,
    requester_id: str,
    pid: Optional[str],
    title: Optional[str] = None,
    caption: Optional[str] = None,
    images: Optional[List[ImageUpload]] = None,
    to_dict: bool = True,
) -> Dict | PostView:
    """
    作者更新帖子：
    1. 帖子必须存在，且当前用户是作者
    2. 如果带了新图片：先全部上传新图，再全部删除旧图，最后替换图片记录
       - 任一步失败整体中止，已完成的上传 / 删除不回滚
    3. 标题 / 配文只在提供时修改
    """
    if not pid:
        raise PostNotFound()

    post = post_repo.get_post_record(pid)
    if not post:
        raise PostNotFound()

    ensure_owner(requester_id, post.author_id, NotPostOwner)

    if not user_repo.get_user_by_uid(requester_id):
        raise UserNotFound()

    new_media: Optional[List[MediaOut]] = None
    if images:
        _validate_images(images)
        new_media = _upload_images(blob_store, images)
        logger.info(f"Uploaded {len(new_media)} replacement images for pid={pid}")
        _delete_images(blob_store, post.images)
        logger.info(f"Deleted {len(post.images)} old images for pid={pid}")

    ok = post_repo.update_post(
        pid,
        PostUpdate(title=title or None, caption=caption or None, images=new_media),
    )
    if not ok:
        # 上传期间帖子被删除
        raise PostNotFound()
    logger.info(f"Updated post pid={pid}")

    post_view = post_repo.get_post_view(pid, viewer_id=requester_id)
    if not post_view:
        raise PostNotFound()

    return post_view.model_dump(by_alias=True) if to_dict else post_view


def delete_post(
    post_repo: IPostRepository,
    blob_store: IBlobStore,
    requester_id: str,
    pid: str,
) -> bool:
    """
    删除帖子：
    1. 帖子必须存在，且当前用户是作者（否则帖子和图片都不动）
    2. 先逐张删除图床上的图片，任一失败则中止，帖子保留
    3. 删除帖子记录（图片 / 统计 / 点赞一起删除，评论保留）
    """
    post = post_repo.get_post_record(pid)
    if not post:
        raise PostNotFound()

    ensure_owner(requester_id, post.author_id, NotPostOwner)

    _delete_images(blob_store, post.images)

    if not post_repo.delete_post(pid):
        # 删除图片期间帖子已被删除
        logger.warning(f"Delete post failed, pid={pid} not found")
        raise PostNotFound()

    logger.info(f"Deleted post pid={pid}")
    return True
