# domain_exceptions.py
from typing import Optional


class BanoError(Exception):
    """
    所有业务异常的基类：
    - message 是可以直接返回给前端的静态文案
    - status_code 是接口层映射的 HTTP 状态码
    """
    status_code = 500
    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------- 五类基础错误 ----------------------------------

class ValidationError(BanoError):
    """输入缺失 / 格式不合法"""
    status_code = 400
    default_message = "Invalid request."


class UnauthorizedError(BanoError):
    """会话缺失 / 无效 / 过期，或会话对应的用户已不存在"""
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(BanoError):
    """已登录但无权操作该资源"""
    status_code = 403
    default_message = "Forbidden."


class NotFoundError(BanoError):
    """引用的实体不存在"""
    status_code = 404
    default_message = "Not found."


class DependencyError(BanoError):
    """数据库 / 图床等外部依赖失败"""
    status_code = 500
    default_message = "Something went wrong."


# ---------------------------------- 具体业务错误 ----------------------------------

class UserNotFound(NotFoundError):
    """
    在需要用户存在的场景下未找到对应用户时抛出：
    - 例如发帖、评论、登录等
    """
    default_message = "User not found."


class PostNotFound(NotFoundError):
    """找不到帖子"""
    default_message = "Post not found."


class CommentNotFound(NotFoundError):
    """找不到评论"""
    default_message = "Comment not found."


class MissingFieldsError(ValidationError):
    default_message = "All fields are required."


class EmailAlreadyExists(ValidationError):
    """注册时邮箱已被占用"""
    default_message = "Email already exists."


class InvalidCredentials(ValidationError):
    """登录密码错误"""
    default_message = "Invalid credentials."


class TooManyImagesError(ValidationError):
    def __init__(self, limit: int, message: Optional[str] = None):
        self.limit = limit
        super().__init__(message or f"At most {limit} images are allowed.")


class ImageTooLargeError(ValidationError):
    def __init__(self, max_bytes: int, message: Optional[str] = None):
        self.max_bytes = max_bytes
        super().__init__(message or f"Each image must be at most {max_bytes // (1024 * 1024)}MB.")


class NotPostOwner(ForbiddenError):
    """非作者尝试修改 / 删除帖子"""
    default_message = "You can only modify your own posts."


class NotCommentAuthor(ForbiddenError):
    """非作者尝试删除评论"""
    default_message = "You can only delete your own comments."


class BlobStoreError(DependencyError):
    """图床上传 / 删除失败"""
    default_message = "Something went wrong while processing images."
