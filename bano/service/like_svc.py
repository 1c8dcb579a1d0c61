from typing import Dict

from bano.schemas.like import LikeToggleOut
from bano.storage.post.post_interface import IPostRepository
from bano.storage.like.like_interface import ILikeRepository
from bano.storage.post_stats.post_stats_interface import IPostStatsRepository

from bano.core.exceptions import PostNotFound
from bano.core.logx import logger


def toggle_like(
    post_repo: IPostRepository,
    like_repo: ILikeRepository,
    stats_repo: IPostStatsRepository,
    post_id: str,
    user_id: str,
    to_dict: bool = True,
) -> Dict | LikeToggleOut:
    """
    点赞 / 取消点赞：

    1. 校验帖子是否存在
    2. 读取当前用户是否在点赞集合中
    3. 已点赞 → 移出集合，计数 -1；未点赞 → 加入集合，计数 +1
       - 集合写入与计数更新是两条独立语句
       - 只有集合真的发生变化时才改计数（并发的重复点赞被唯一约束挡住）
    4. 返回切换后的 isLiked
    """
    # 1. 校验帖子是否存在
    if not post_repo.get_post_record(post_id):
        raise PostNotFound()

    # 2. 读取当前状态（与第 3 步不是一个原子操作）
    liked = like_repo.is_liked(post_id, user_id)

    # 3. 切换
    if liked:
        if like_repo.remove_like(post_id, user_id):
            if not stats_repo.update_likes(post_id, step=-1):
                logger.warning(f"like_count already 0 for post_id={post_id}")
        else:
            logger.warning(f"Like of user {user_id} on post {post_id} was removed concurrently")
    else:
        if like_repo.add_like(post_id, user_id):
            if not stats_repo.update_likes(post_id, step=1):
                logger.warning(f"like_count not incremented, post_stats missing for post_id={post_id}")
        else:
            logger.warning(f"Like of user {user_id} on post {post_id} was added concurrently")

    logger.info(f"User {user_id} {'unliked' if liked else 'liked'} post {post_id}")

    result = LikeToggleOut(is_liked=not liked)
    return result.model_dump(by_alias=True) if to_dict else result
