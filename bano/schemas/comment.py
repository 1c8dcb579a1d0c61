from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from bano.schemas.post import UserInfo


class CommentIn(BaseModel):
    """评论请求体"""
    comment: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class CommentCreate(BaseModel):
    """
    创建评论（内部调用）
    """
    post_id: str
    author_id: str
    comment: str

    model_config = ConfigDict(extra="forbid")


class CommentRecord(BaseModel):
    """评论在存储层的基础信息（用于归属校验）"""
    cid: str
    post_id: str
    author_id: str

    model_config = ConfigDict(from_attributes=True)


class CommentView(BaseModel):
    """
    对外返回的评论视图：附带作者 _id + username
    """
    id: str = Field(serialization_alias="_id")
    user_id: str = Field(serialization_alias="userId")
    user_info: UserInfo = Field(serialization_alias="userInfo")
    post_id: str = Field(serialization_alias="postId")
    comment: str
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")
