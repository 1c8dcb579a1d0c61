# bano/storage/blob/blob_interface.py

from typing import Protocol

from bano.schemas.media import MediaOut


class IBlobStore(Protocol):
    """
    图床接口协议：
    - upload 返回稳定的 public_id + 可访问的 url
    - delete 按 public_id 删除
    - 任一操作失败都抛 BlobStoreError，由业务层中止整个流程
    """

    def upload(self, data: bytes, filename: str, content_type: str) -> MediaOut:
        ...

    def delete(self, public_id: str) -> None:
        ...
