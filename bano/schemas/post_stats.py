from pydantic import BaseModel, ConfigDict


class PostStatsOut(BaseModel):
    post_id: str
    like_count: int
    comment_count: int

    model_config = ConfigDict(from_attributes=True)
