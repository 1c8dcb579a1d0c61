from typing import List, Optional

from fastapi import Cookie, Depends, HTTPException, UploadFile, Response

from bano.core.config import settings
from bano.core.exceptions import UnauthorizedError
from bano.core.security import create_access_token, token_max_age_seconds
from bano.schemas.media import ImageUpload
from bano.service import session_svc
from bano.storage.database import get_user_repo
from bano.storage.user.user_interface import IUserRepository


def get_current_uid(
    auth_token: Optional[str] = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
    user_repo: IUserRepository = Depends(get_user_repo),
) -> str:
    """
    会话依赖：从 HTTP-only cookie 中解析当前用户 uid，失败统一 401
    """
    try:
        return session_svc.authenticate(user_repo, auth_token)
    except UnauthorizedError as e:
        raise HTTPException(status_code=401, detail=e.message)


def set_session_cookie(response: Response, user_id: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=create_access_token(user_id),
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
        max_age=token_max_age_seconds(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def read_images(files: Optional[List[UploadFile]]) -> List[ImageUpload]:
    """
    读取 multipart 中的图片：
    - 跳过浏览器为空文件框提交的空 part
    - 每张最多读 MAX_IMAGE_BYTES + 1 字节，超出部分交给业务层判定为过大
    """
    images: List[ImageUpload] = []
    for f in files or []:
        if not f.filename:
            continue
        images.append(
            ImageUpload(
                filename=f.filename,
                content_type=f.content_type or "application/octet-stream",
                data=f.file.read(settings.MAX_IMAGE_BYTES + 1),
            )
        )
    return images
