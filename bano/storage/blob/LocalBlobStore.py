# bano/storage/blob/LocalBlobStore.py

import os

from bano.schemas.media import MediaOut
from bano.storage.blob.blob_interface import IBlobStore
from bano.storage.blob.keys import build_object_key
from bano.core.exceptions import BlobStoreError
from bano.core.logx import logger


class LocalBlobStore(IBlobStore):
    """
    本地磁盘图床：文件写入 base_dir，通过 url_prefix（/static/uploads）访问
    public_id 即相对 base_dir 的路径
    """

    def __init__(self, base_dir: str, url_prefix: str):
        self.base_dir = base_dir
        self.url_prefix = url_prefix.rstrip("/")

    def _path(self, public_id: str) -> str:
        path = os.path.abspath(os.path.join(self.base_dir, public_id))
        if not path.startswith(os.path.abspath(self.base_dir) + os.sep):
            raise BlobStoreError(f"invalid public_id {public_id}")
        return path

    def upload(self, data: bytes, filename: str, content_type: str) -> MediaOut:
        public_id = build_object_key("", "posts", filename)
        path = self._path(public_id)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.exception(f"Local upload failed for {filename}")
            raise BlobStoreError() from e

        return MediaOut(public_id=public_id, url=f"{self.url_prefix}/{public_id}")

    def delete(self, public_id: str) -> None:
        path = self._path(public_id)
        try:
            os.remove(path)
        except FileNotFoundError:
            # 已经不存在，视为删除成功
            logger.warning(f"Local blob {public_id} already missing")
        except OSError as e:
            logger.exception(f"Local delete failed for {public_id}")
            raise BlobStoreError() from e
