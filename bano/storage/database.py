from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from bano.core.config import settings
from bano.models.base import Base
from bano.models import user, post, post_stats, like, comment  # noqa: F401  注册所有表
from bano.storage.user.SQLAlchemyUserRepository import SQLAlchemyUserRepository
from bano.storage.post.SQLAlchemyPostRepository import SQLAlchemyPostRepository
from bano.storage.post_stats.SQLAlchemyPostStatsRepository import SQLAlchemyPostStatsRepository
from bano.storage.like.SQLAlchemyLikeRepository import SQLAlchemyLikeRepository
from bano.storage.comment.SQLAlchemyCommentRepository import SQLAlchemyCommentRepository
from bano.storage.blob.blob_interface import IBlobStore
from bano.storage.blob.LocalBlobStore import LocalBlobStore


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


# SQLAlchemy 引擎
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_blob_store() -> IBlobStore:
    """
    根据 BLOB_BACKEND 选择图床实现，进程内只创建一次
    """
    if settings.BLOB_BACKEND == "oss":
        from bano.storage.blob.OSSBlobStore import OSSBlobStore

        return OSSBlobStore(
            access_key_id=settings.OSS_ACCESS_KEY_ID,
            access_key_secret=settings.OSS_ACCESS_KEY_SECRET,
            endpoint=settings.OSS_ENDPOINT,
            bucket_name=settings.OSS_BUCKET,
            prefix=settings.OSS_PREFIX,
            base_url=settings.OSS_BASE_URL,
        )
    return LocalBlobStore(base_dir=settings.UPLOAD_DIR, url_prefix=settings.UPLOAD_URL_PREFIX)


# 未来可以根据配置切换不同的实现
def get_user_repo(db: Session = Depends(get_db)) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db)
def get_post_repo(db: Session = Depends(get_db)) -> SQLAlchemyPostRepository:
    return SQLAlchemyPostRepository(db)
def get_poststats_repo(db: Session = Depends(get_db)) -> SQLAlchemyPostStatsRepository:
    return SQLAlchemyPostStatsRepository(db)
def get_like_repo(db: Session = Depends(get_db)) -> SQLAlchemyLikeRepository:
    return SQLAlchemyLikeRepository(db)
def get_comment_repo(db: Session = Depends(get_db)) -> SQLAlchemyCommentRepository:
    return SQLAlchemyCommentRepository(db)
