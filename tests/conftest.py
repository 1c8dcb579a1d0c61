import os

# 必须在导入 bano 之前设置，模块级 settings / engine 会读取这些变量
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from bano.models.base import Base
from bano.schemas.media import MediaOut
from bano.storage.database import get_db, get_blob_store
from bano.core.exceptions import BlobStoreError


class FakeBlobStore:
    """
    内存图床：记录上传 / 删除，可以手动切换为失败模式
    """

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.deleted: List[str] = []
        self.fail_upload = False
        self.fail_delete = False

    def upload(self, data: bytes, filename: str, content_type: str) -> MediaOut:
        if self.fail_upload:
            raise BlobStoreError()
        public_id = f"posts/{uuid.uuid4().hex}"
        self.objects[public_id] = data
        return MediaOut(public_id=public_id, url=f"https://blob.test/{public_id}")

    def delete(self, public_id: str) -> None:
        if self.fail_delete:
            raise BlobStoreError()
        self.objects.pop(public_id, None)
        self.deleted.append(public_id)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def blob_store():
    return FakeBlobStore()


@pytest.fixture()
def make_client(session_factory, blob_store):
    """
    每个用户一个 TestClient，各自持有自己的会话 cookie
    """

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    clients: List[TestClient] = []

    def _make() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client):
    return make_client()


# ---------------------------------- 辅助函数 ----------------------------------

def register(client: TestClient, username: str, password: str = "secret123", email: str = None) -> str:
    resp = client.post(
        "/api/auth/registration",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        },
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["userId"]


def image_files(count: int = 1, size: int = 16):
    return [
        ("imageFiles", (f"photo{i}.png", b"x" * size, "image/png"))
        for i in range(count)
    ]


def create_post(client: TestClient, title: str = "Sunset", caption: str = "At the beach", images: int = 1) -> dict:
    resp = client.post(
        "/api/post/",
        data={"title": title, "caption": caption},
        files=image_files(images),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
