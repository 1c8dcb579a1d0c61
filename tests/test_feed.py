import pytest

from bano.core.config import settings
from bano.service.feed_svc import resolve_paging
from tests.conftest import register, create_post


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("2", "5", (2, 5)),
        ("0", "-3", (1, 10)),
        ("abc", "1.5", (1, 1)),
        ("2abc", " 7 items", (2, 7)),
        ("x2", "", (1, 10)),
        ("3", "100000", (3, 100)),
    ],
)
def test_resolve_paging(page, limit, expected):
    assert resolve_paging(page, limit) == expected


def test_pages_are_disjoint_and_ordered(client):
    register(client, "alice")
    ids = [create_post(client, title=f"p{i}")["_id"] for i in range(3)]

    page1 = [p["_id"] for p in client.get("/api/post/all?page=1&limit=2").json()]
    page2 = [p["_id"] for p in client.get("/api/post/all?page=2&limit=2").json()]
    page3 = client.get("/api/post/all?page=3&limit=2").json()

    assert page1 == [ids[2], ids[1]]
    assert page2 == [ids[0]]
    assert not set(page1) & set(page2)
    assert page3 == []


def test_huge_page_is_empty_not_error(client):
    register(client, "alice")
    post = create_post(client)
    huge = "99999999999999999999"

    resp = client.get(f"/api/post/all?page={huge}&limit=2")
    assert resp.status_code == 200
    assert resp.json() == []

    client.post(f"/api/comment/{post['_id']}", json={"comment": "hi"})
    resp = client.get(f"/api/comment/{post['_id']}?page={huge}")
    assert resp.status_code == 200
    assert resp.json() == []


def test_resolve_paging_caps_offset():
    page, size = resolve_paging("9" * 30, "2")
    assert size == 2
    assert (page - 1) * size < 2 ** 63


def test_default_page_size(client):
    register(client, "alice")
    for i in range(settings.DEFAULT_PAGE_SIZE + 1):
        create_post(client, title=f"p{i}")

    assert len(client.get("/api/post/all").json()) == settings.DEFAULT_PAGE_SIZE
    assert len(client.get("/api/post/all?page=2").json()) == 1


def test_posts_by_user(make_client):
    alice = make_client()
    alice_id = register(alice, "alice")
    create_post(alice, title="from alice")

    bob = make_client()
    register(bob, "bob")
    create_post(bob, title="from bob")

    by_alice = bob.get(f"/api/post/by-userId?userId={alice_id}").json()
    assert [p["title"] for p in by_alice] == ["from alice"]

    # 不传 userId 时返回自己的帖子
    mine = bob.get("/api/post/by-userId").json()
    assert [p["title"] for p in mine] == ["from bob"]

    assert len(bob.get("/api/post/all").json()) == 2


def test_feed_requires_auth(client):
    assert client.get("/api/post/all").status_code == 401
    assert client.get("/api/comment/anything").status_code == 401
