from pydantic import BaseModel, ConfigDict


class MediaOut(BaseModel):
    """
    图床返回的图片引用：public_id 用于删除，url 用于展示
    """
    public_id: str
    url: str

    model_config = ConfigDict(from_attributes=True)


class ImageUpload(BaseModel):
    """
    接口层读出的待上传图片
    """
    filename: str
    content_type: str
    data: bytes
