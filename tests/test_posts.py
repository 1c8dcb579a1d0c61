import pytest

from bano.core.config import settings
from bano.core.exceptions import PostNotFound
from bano.service import post_svc
from bano.storage.post.SQLAlchemyPostRepository import SQLAlchemyPostRepository
from tests.conftest import register, create_post, image_files


def test_create_post_returns_fresh_view(client, blob_store):
    uid = register(client, "alice")
    post = create_post(client, title="Sunset", caption="At the beach", images=2)

    assert post["title"] == "Sunset"
    assert post["caption"] == "At the beach"
    assert post["userInfo"] == {"_id": uid, "username": "alice"}
    assert post["isLiked"] is False
    assert post["likesCount"] == 0
    assert post["commentsCount"] == 0
    assert len(post["images"]) == 2
    for image in post["images"]:
        assert image["public_id"] in blob_store.objects
        assert image["url"].startswith("https://blob.test/")


def test_create_then_list_roundtrip(client):
    register(client, "alice")
    post = create_post(client)

    posts = client.get("/api/post/all").json()
    assert len(posts) == 1
    listed = posts[0]
    assert listed["_id"] == post["_id"]
    assert (listed["likesCount"], listed["commentsCount"], listed["isLiked"]) == (0, 0, False)


def test_create_post_requires_auth(client):
    resp = client.post("/api/post/", data={"title": "t", "caption": "c"}, files=image_files(1))
    assert resp.status_code == 401


def test_create_post_requires_all_fields(client):
    register(client, "alice")
    resp = client.post("/api/post/", data={"title": "t", "caption": "c"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "All fields are required."}

    resp = client.post("/api/post/", data={"caption": "c"}, files=image_files(1))
    assert resp.status_code == 400


def test_create_post_image_limits(client, blob_store, monkeypatch):
    register(client, "alice")

    resp = client.post("/api/post/", data={"title": "t", "caption": "c"}, files=image_files(4))
    assert resp.status_code == 400

    monkeypatch.setattr(settings, "MAX_IMAGE_BYTES", 8)
    resp = client.post("/api/post/", data={"title": "t", "caption": "c"}, files=image_files(1, size=9))
    assert resp.status_code == 400

    assert blob_store.objects == {}
    assert client.get("/api/post/all").json() == []


def test_upload_failure_creates_nothing(client, blob_store):
    register(client, "alice")
    blob_store.fail_upload = True

    resp = client.post("/api/post/", data={"title": "t", "caption": "c"}, files=image_files(1))
    assert resp.status_code == 500
    assert resp.json() == {"message": "Something went wrong while uploading image."}
    assert client.get("/api/post/all").json() == []


# ---------------------------------- 更新 ----------------------------------

def test_update_title_only(client):
    register(client, "alice")
    post = create_post(client, title="Old", caption="Caption")

    resp = client.patch("/api/post/", data={"postId": post["_id"], "title": "New"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "New"
    assert body["caption"] == "Caption"
    assert body["images"] == post["images"]


def test_update_replaces_images(client, blob_store):
    register(client, "alice")
    post = create_post(client, images=2)
    old_ids = [img["public_id"] for img in post["images"]]

    resp = client.patch("/api/post/", data={"postId": post["_id"]}, files=image_files(1))
    assert resp.status_code == 200
    new_images = resp.json()["images"]
    assert len(new_images) == 1
    assert new_images[0]["public_id"] not in old_ids
    assert blob_store.deleted == old_ids


def test_update_by_non_owner_forbidden(make_client, blob_store):
    alice = make_client()
    register(alice, "alice")
    post = create_post(alice, title="Mine")

    bob = make_client()
    register(bob, "bob")
    resp = bob.patch("/api/post/", data={"postId": post["_id"], "title": "Stolen"}, files=image_files(1))
    assert resp.status_code == 403
    assert blob_store.deleted == []
    assert alice.get("/api/post/all").json()[0]["title"] == "Mine"


def test_update_missing_post(client):
    register(client, "alice")
    assert client.patch("/api/post/", data={"title": "x"}).status_code == 404
    assert client.patch("/api/post/", data={"postId": "nope", "title": "x"}).status_code == 404


# ---------------------------------- 删除 ----------------------------------

def test_delete_post_removes_images(client, blob_store):
    register(client, "alice")
    post = create_post(client, images=3)

    resp = client.delete(f"/api/post/{post['_id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Post deleted successfully."}
    assert sorted(blob_store.deleted) == sorted(img["public_id"] for img in post["images"])
    assert client.get("/api/post/all").json() == []


def test_delete_by_non_owner_leaves_post_untouched(make_client, blob_store):
    alice = make_client()
    register(alice, "alice")
    post = create_post(alice)

    bob = make_client()
    register(bob, "bob")
    resp = bob.delete(f"/api/post/{post['_id']}")
    assert resp.status_code == 403
    assert blob_store.deleted == []
    assert len(alice.get("/api/post/all").json()) == 1


def test_delete_aborts_when_blob_delete_fails(client, blob_store):
    register(client, "alice")
    post = create_post(client)
    blob_store.fail_delete = True

    resp = client.delete(f"/api/post/{post['_id']}")
    assert resp.status_code == 500
    assert len(client.get("/api/post/all").json()) == 1


def test_delete_missing_post(client):
    register(client, "alice")
    assert client.delete("/api/post/nope").status_code == 404


class _VanishingPostRepository(SQLAlchemyPostRepository):
    """帖子在图片删除后、记录删除前被并发删掉"""

    def delete_post(self, pid: str) -> bool:
        return False


def test_delete_reports_post_removed_concurrently(client, db, blob_store):
    uid = register(client, "alice")
    post = create_post(client)

    with pytest.raises(PostNotFound):
        post_svc.delete_post(
            post_repo=_VanishingPostRepository(db),
            blob_store=blob_store,
            requester_id=uid,
            pid=post["_id"],
        )
