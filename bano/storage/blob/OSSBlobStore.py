# bano/storage/blob/OSSBlobStore.py

import oss2
from oss2.exceptions import OssError

from bano.schemas.media import MediaOut
from bano.storage.blob.blob_interface import IBlobStore
from bano.storage.blob.keys import build_object_key
from bano.core.exceptions import BlobStoreError
from bano.core.logx import logger


def _normalize_endpoint(endpoint: str) -> str:
    endpoint = (endpoint or "").strip()
    if not endpoint:
        return ""
    if endpoint.startswith("http://") or endpoint.startswith("https://"):
        return endpoint
    return f"https://{endpoint}"


def _base_url(endpoint: str, bucket: str, base_url: str = "") -> str:
    if base_url:
        return base_url.rstrip("/")
    scheme, host = "https", endpoint
    if endpoint.startswith("http://"):
        scheme, host = "http", endpoint[len("http://"):]
    elif endpoint.startswith("https://"):
        host = endpoint[len("https://"):]
    if host.startswith(f"{bucket}."):
        return f"{scheme}://{host}".rstrip("/")
    return f"{scheme}://{bucket}.{host}".rstrip("/")


class OSSBlobStore(IBlobStore):
    """
    阿里云 OSS 图床：public_id 即对象 key
    """

    def __init__(
        self,
        access_key_id: str,
        access_key_secret: str,
        endpoint: str,
        bucket_name: str,
        prefix: str = "",
        base_url: str = "",
    ):
        auth = oss2.Auth(access_key_id, access_key_secret)
        self.bucket = oss2.Bucket(auth, _normalize_endpoint(endpoint), bucket_name)
        self.prefix = prefix
        self.base_url = _base_url(endpoint.strip(), bucket_name, base_url)

    def upload(self, data: bytes, filename: str, content_type: str) -> MediaOut:
        key = build_object_key(self.prefix, "posts", filename)
        try:
            self.bucket.put_object(key, data, headers={"Content-Type": content_type})
        except OssError as e:
            logger.exception(f"OSS upload failed for {filename}")
            raise BlobStoreError() from e

        return MediaOut(public_id=key, url=f"{self.base_url}/{key}")

    def delete(self, public_id: str) -> None:
        try:
            self.bucket.delete_object(public_id)
        except OssError as e:
            logger.exception(f"OSS delete failed for {public_id}")
            raise BlobStoreError() from e
