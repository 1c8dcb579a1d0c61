from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from bano.core.config import settings
from bano.core.biz_response import BizResponse
from bano.core.logx import logger
from bano.routers import auth, posts, comments
from bano.storage.database import create_tables


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info(f"Tables ready, serving API under {settings.API_PREFIX}")
    yield


app = FastAPI(title="Bano", lifespan=lifespan)

# 前端携带 cookie 跨域访问
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 框架层错误也统一成 {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return BizResponse(
        msg=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return BizResponse(msg="Invalid request.", status_code=400)


# 注册路由
app.include_router(auth.auth_router, prefix=settings.API_PREFIX)
app.include_router(posts.posts_router, prefix=settings.API_PREFIX)
app.include_router(comments.comments_router, prefix=settings.API_PREFIX)

# 本地图床的图片
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)

# uvicorn main:app
# uvicorn main:app --reload
if settings.is_production and settings.FRONTEND_DIST:
    # 生产环境由后端直接托管前端打包产物
    app.mount("/", StaticFiles(directory=settings.FRONTEND_DIST, html=True), name="frontend")
else:
    @app.get("/")
    def root():
        return {"message": "API is running..."}
