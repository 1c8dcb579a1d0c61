from bano.service import like_svc
from bano.storage.post.SQLAlchemyPostRepository import SQLAlchemyPostRepository
from bano.storage.like.SQLAlchemyLikeRepository import SQLAlchemyLikeRepository
from bano.storage.post_stats.SQLAlchemyPostStatsRepository import SQLAlchemyPostStatsRepository
from tests.conftest import register, create_post


def test_like_then_unlike(client):
    register(client, "alice")
    post = create_post(client)
    url = f"/api/post/{post['_id']}/likeUnlike"

    assert client.post(url).json() == {"isLiked": True}
    listed = client.get("/api/post/all").json()[0]
    assert (listed["isLiked"], listed["likesCount"]) == (True, 1)

    assert client.post(url).json() == {"isLiked": False}
    listed = client.get("/api/post/all").json()[0]
    assert (listed["isLiked"], listed["likesCount"]) == (False, 0)


def test_is_liked_is_per_viewer(make_client):
    alice = make_client()
    register(alice, "alice")
    post = create_post(alice)

    bob = make_client()
    register(bob, "bob")
    bob.post(f"/api/post/{post['_id']}/likeUnlike")

    assert alice.get("/api/post/all").json()[0]["isLiked"] is False
    bob_view = bob.get("/api/post/all").json()[0]
    assert (bob_view["isLiked"], bob_view["likesCount"]) == (True, 1)


def test_like_count_matches_likers(make_client):
    author = make_client()
    register(author, "author")
    post = create_post(author)
    url = f"/api/post/{post['_id']}/likeUnlike"

    fans = []
    for name in ("u1", "u2", "u3"):
        fan = make_client()
        register(fan, name)
        fan.post(url)
        fans.append(fan)
    fans[1].post(url)

    assert author.get("/api/post/all").json()[0]["likesCount"] == 2


def test_like_missing_post(client):
    register(client, "alice")
    assert client.post("/api/post/nope/likeUnlike").status_code == 404


def test_like_bumps_post_to_top_of_feed(client):
    register(client, "alice")
    older = create_post(client, title="older")
    create_post(client, title="newer")

    assert client.get("/api/post/all").json()[0]["title"] == "newer"
    client.post(f"/api/post/{older['_id']}/likeUnlike")
    assert client.get("/api/post/all").json()[0]["title"] == "older"


class _StaleLikeRepository(SQLAlchemyLikeRepository):
    """模拟并发：读到的状态永远是「未点赞」"""

    def is_liked(self, post_id: str, user_id: str) -> bool:
        return False


def test_concurrent_duplicate_like_counted_once(client, db):
    uid = register(client, "alice")
    post = create_post(client)

    post_repo = SQLAlchemyPostRepository(db)
    like_repo = _StaleLikeRepository(db)
    stats_repo = SQLAlchemyPostStatsRepository(db)

    for _ in range(2):
        like_svc.toggle_like(post_repo, like_repo, stats_repo, post["_id"], uid)

    assert like_repo.count_likes(post["_id"]) == 1
    assert stats_repo.get_by_post_id(post["_id"]).like_count == 1
