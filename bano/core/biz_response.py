from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class BizResponse(JSONResponse):
    """
    接口层统一响应：
    - 成功：响应体就是 data 本身（前端直接消费扁平化的 JSON）
    - 失败：响应体为 {"message": msg}，只带静态文案，不暴露异常细节
    """

    def __init__(
        self,
        data: Any = None,
        msg: Optional[str] = None,
        status_code: int = 200,
        **kwargs,
    ):
        if status_code >= 400:
            content = {"message": msg or "Something went wrong."}
        elif data is None and msg is not None:
            content = {"message": msg}
        else:
            content = jsonable_encoder(data)
        super().__init__(content=content, status_code=status_code, **kwargs)
