import base64
import json
import textwrap

import httpx

from app.schemas.blog import RemotePost
from app.settings import Settings


def make_settings(**overrides) -> Settings:
    defaults = dict(
        GITHUB_API_URL="https://api.github.test",
        GITHUB_OWNER="owner",
        GITHUB_REPO="blog",
        GITHUB_POSTS_PATH="public/content/posts",
        GITHUB_TOKEN="",
        LOCAL_FALLBACK_SLUGS=["event-order", "Bulkhead-Pattern", "python-magic-methods"],
        BASE_SITE_URL="https://blog.test",
        BLOG_ADMIN_KEY="",
    )
    defaults.update(overrides)
    return Settings(**defaults)


def md(text: str) -> str:
    """Dedent an indented markdown literal used in tests."""
    return textwrap.dedent(text).lstrip()


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGitHub:
    """
    Minimal GitHub contents API stand-in, served through httpx.MockTransport.
    `files` maps a file name under the posts path to its markdown text.
    """

    def __init__(self, files: dict, base="https://api.github.test/repos/owner/blog"):
        self.files = files
        self.base = base
        self.requests = []
        self.fail_listing = False
        self.fail_files = set()
        self.download_only = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url.startswith("https://raw.test/"):
            name = url.rsplit("/", 1)[-1]
            return httpx.Response(200, content=self.files[name].encode("utf-8"))

        prefix = f"{self.base}/contents/public/content/posts"
        if url == prefix:
            if self.fail_listing:
                return httpx.Response(500, json={"message": "boom"})
            listing = [
                {"name": name, "path": f"public/content/posts/{name}", "type": "file"}
                for name in self.files
            ]
            listing.append(
                {"name": "images", "path": "public/content/posts/images", "type": "dir"}
            )
            listing.append(
                {"name": "notes.txt", "path": "public/content/posts/notes.txt", "type": "file"}
            )
            return httpx.Response(200, json=listing)

        if url.startswith(prefix + "/"):
            name = url[len(prefix) + 1 :]
            if name not in self.files or name in self.fail_files:
                return httpx.Response(404, json={"message": "Not Found"})
            if name in self.download_only:
                return httpx.Response(
                    200,
                    json={"name": name, "download_url": f"https://raw.test/{name}"},
                )
            encoded = base64.b64encode(self.files[name].encode("utf-8")).decode()
            # GitHub wraps base64 content with newlines
            wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
            return httpx.Response(
                200,
                content=json.dumps(
                    {"name": name, "content": wrapped, "encoding": "base64"}
                ).encode(),
                headers={"Content-Type": "application/json"},
            )

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class FakeRemoteRepo:
    """
    Minimal remote repo stand-in used in service tests.
    """

    def __init__(self, posts=None, error: Exception | None = None):
        self.posts = posts or {}
        self.error = error
        self.calls = 0

    async def get_all_posts(self):
        self.calls += 1
        if self.error:
            raise self.error
        return [
            RemotePost(slug=slug, content=content, lastModified="2024-01-01T00:00:00")
            for slug, content in self.posts.items()
        ]


class FakeSource:
    def __init__(self, name: str, texts: dict, error: Exception | None = None):
        self.name = name
        self.texts = texts
        self.error = error
        self.calls = []

    async def fetch(self, slug: str):
        self.calls.append(slug)
        if self.error:
            raise self.error
        return self.texts.get(slug)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, all_posts=None, post=None, error: Exception | None = None):
        self.all_posts = all_posts or []
        self.post = post
        self.error = error
        self.invalidated = False

    async def get_all_posts(self):
        if self.error:
            raise self.error
        return self.all_posts

    async def get_posts_by_tag(self, tag):
        return [p for p in self.all_posts if tag in p.tags]

    async def get_all_tags(self):
        return sorted({t for p in self.all_posts for t in p.tags})

    async def get_series(self, name):
        return [p for p in self.all_posts if p.series == name]

    async def get_post_by_slug(self, slug):
        if self.error:
            raise self.error
        return self.post

    def invalidate_cache(self):
        self.invalidated = True
