from pydantic import BaseModel, Field


class LikeToggleOut(BaseModel):
    """点赞 / 取消点赞后的状态"""
    is_liked: bool = Field(serialization_alias="isLiked")
