from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from app import dependencies as deps
from app.routers import posts
from app.schemas.blog import Post, PostMetadata
from tests.conftest import FakePostsService


def make_meta(slug, **overrides):
    data = dict(
        title=slug.title(),
        date="2024-01-01",
        author="Tarun",
        readTime="1 min read",
        slug=slug,
    )
    data.update(overrides)
    return PostMetadata(**data)


def make_app(fake_service: FakePostsService):
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(posts.router)
    return app


def test_list_posts_returns_posts_in_service_order():
    fake_posts = [make_meta("second", tags=["python"]), make_meta("first")]
    client = TestClient(make_app(FakePostsService(all_posts=fake_posts)))

    res = client.get("/posts")
    assert res.status_code == 200
    assert [p["slug"] for p in res.json()] == ["second", "first"]


def test_list_posts_filters_by_tag():
    fake_posts = [make_meta("second", tags=["python"]), make_meta("first")]
    client = TestClient(make_app(FakePostsService(all_posts=fake_posts)))

    res = client.get("/posts", params={"tag": "python"})
    assert [p["slug"] for p in res.json()] == ["second"]


def test_get_post_returns_404_when_missing():
    client = TestClient(make_app(FakePostsService(post=None)))

    res = client.get("/posts/missing")
    assert res.status_code == 404
    assert res.json()["detail"] == "Post not found"


def test_get_post_renders_html():
    post = Post(content="# Hi\n\nBody", metadata=make_meta("hello"))
    client = TestClient(make_app(FakePostsService(post=post)))

    res = client.get("/posts/hello")
    assert res.status_code == 200
    body = res.json()
    assert body["metadata"]["slug"] == "hello"
    assert body["content"] == "# Hi\n\nBody"
    assert "Hi</h1>" in body["html"]


def test_get_post_seo():
    post = Post(content="Body", metadata=make_meta("hello", excerpt="Short"))
    client = TestClient(make_app(FakePostsService(post=post)))

    res = client.get("/posts/hello/seo")
    assert res.status_code == 200
    assert res.json()["description"] == "Short"
    assert res.json()["openGraph"]["type"] == "article"


def test_get_post_seo_missing():
    client = TestClient(make_app(FakePostsService(post=None)))

    assert client.get("/posts/missing/seo").status_code == 404


def test_list_tags_and_series():
    fake_posts = [
        make_meta("a", tags=["x", "y"], series="Patterns"),
        make_meta("b", tags=["y"]),
    ]
    client = TestClient(make_app(FakePostsService(all_posts=fake_posts)))

    assert client.get("/tags").json() == ["x", "y"]
    assert [p["slug"] for p in client.get("/series/Patterns").json()] == ["a"]
    assert client.get("/series/Unknown").status_code == 404


def test_list_posts_passes_through_http_exception():
    class BoomService(FakePostsService):
        async def get_all_posts(self):
            raise HTTPException(status_code=418, detail="teapot")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts")
    assert res.status_code == 418
    assert res.json()["detail"] == "teapot"


def test_list_posts_returns_500_on_unexpected_error():
    client = TestClient(make_app(FakePostsService(error=RuntimeError("boom"))))

    res = client.get("/posts")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve posts"


def test_get_post_returns_500_on_unexpected_error():
    client = TestClient(make_app(FakePostsService(error=RuntimeError("boom"))))

    res = client.get("/posts/hello")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve post"
