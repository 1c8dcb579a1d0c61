from bano.models.comment import Comment
from bano.storage.comment.SQLAlchemyCommentRepository import SQLAlchemyCommentRepository
from tests.conftest import register, create_post


def test_comment_roundtrip(client):
    uid = register(client, "alice")
    post = create_post(client)

    resp = client.post(f"/api/comment/{post['_id']}", json={"comment": "Nice!"})
    assert resp.status_code == 200
    comment = resp.json()
    assert comment["comment"] == "Nice!"
    assert comment["userId"] == uid
    assert comment["userInfo"] == {"_id": uid, "username": "alice"}
    assert comment["postId"] == post["_id"]

    listed = client.get(f"/api/comment/{post['_id']}").json()
    assert [c["_id"] for c in listed] == [comment["_id"]]
    assert client.get("/api/post/all").json()[0]["commentsCount"] == 1


def test_comment_requires_text(client):
    register(client, "alice")
    post = create_post(client)

    resp = client.post(f"/api/comment/{post['_id']}", json={"comment": "   "})
    assert resp.status_code == 400
    assert client.post(f"/api/comment/{post['_id']}", json={}).status_code == 400


def test_comment_on_missing_post(client, db):
    register(client, "alice")
    other = create_post(client)

    resp = client.post("/api/comment/nope", json={"comment": "hello"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Post not found."}
    assert db.query(Comment).count() == 0

    listed = client.get("/api/post/all").json()
    assert [(p["_id"], p["commentsCount"]) for p in listed] == [(other["_id"], 0)]


def test_comments_newest_first_and_paged(client):
    register(client, "alice")
    post = create_post(client)
    for text in ("first", "second", "third"):
        client.post(f"/api/comment/{post['_id']}", json={"comment": text})

    page1 = client.get(f"/api/comment/{post['_id']}?page=1&limit=2").json()
    page2 = client.get(f"/api/comment/{post['_id']}?page=2&limit=2").json()
    assert [c["comment"] for c in page1] == ["third", "second"]
    assert [c["comment"] for c in page2] == ["first"]


def test_delete_comment(make_client):
    alice = make_client()
    register(alice, "alice")
    post = create_post(alice)
    cid = alice.post(f"/api/comment/{post['_id']}", json={"comment": "hi"}).json()["_id"]

    bob = make_client()
    register(bob, "bob")
    assert bob.delete(f"/api/comment/{cid}").status_code == 403

    resp = alice.delete(f"/api/comment/{cid}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Comment deleted successfully."}
    assert alice.get(f"/api/comment/{post['_id']}").json() == []
    assert alice.get("/api/post/all").json()[0]["commentsCount"] == 0

    assert alice.delete(f"/api/comment/{cid}").status_code == 404


def test_comments_survive_post_deletion(client):
    register(client, "alice")
    post = create_post(client)
    client.post(f"/api/comment/{post['_id']}", json={"comment": "still here"})

    assert client.delete(f"/api/post/{post['_id']}").status_code == 200
    listed = client.get(f"/api/comment/{post['_id']}").json()
    assert [c["comment"] for c in listed] == ["still here"]


def test_comment_counter_tracks_rows(client, db):
    register(client, "alice")
    post = create_post(client)
    cids = [
        client.post(f"/api/comment/{post['_id']}", json={"comment": str(i)}).json()["_id"]
        for i in range(3)
    ]
    client.delete(f"/api/comment/{cids[0]}")

    listed = client.get("/api/post/all").json()[0]
    assert listed["commentsCount"] == SQLAlchemyCommentRepository(db).count_by_post(post["_id"]) == 2
