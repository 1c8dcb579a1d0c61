from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from bano.schemas.media import MediaOut


class UserInfo(BaseModel):
    """帖子 / 评论中内嵌的作者信息"""
    id: str = Field(serialization_alias="_id")
    username: str


class PostCreate(BaseModel):
    """
    创建帖子（内部调用插入帖子表中，图片已上传完毕）
    """
    author_id: str
    title: str
    caption: str
    images: List[MediaOut]

    model_config = ConfigDict(extra="forbid")


class PostUpdate(BaseModel):
    """
    作者更新帖子：None 表示该字段不修改
    """
    title: Optional[str] = None
    caption: Optional[str] = None
    images: Optional[List[MediaOut]] = None

    model_config = ConfigDict(extra="forbid")


class PostRecord(BaseModel):
    """
    帖子在存储层的基础信息（用于归属校验、图片清理）
    """
    pid: str
    author_id: str
    title: str
    caption: str
    images: List[MediaOut]

    model_config = ConfigDict(from_attributes=True)


class PostView(BaseModel):
    """
    对外返回的帖子视图：
    - 作者信息（_id + username）
    - isLiked 针对当前访问者计算
    - likesCount / commentsCount 来自 post_stats
    """
    id: str = Field(serialization_alias="_id")
    user_info: Optional[UserInfo] = Field(default=None, serialization_alias="userInfo")
    title: str
    caption: str
    images: List[MediaOut]
    is_liked: bool = Field(default=False, serialization_alias="isLiked")
    likes_count: int = Field(default=0, serialization_alias="likesCount")
    comments_count: int = Field(default=0, serialization_alias="commentsCount")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")
