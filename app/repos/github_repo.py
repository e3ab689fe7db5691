import asyncio
import base64
import datetime
import logging
from typing import List, Optional

import httpx

from app.cache import TTLCache
from app.schemas.blog import RemotePost
from app.settings import Settings, settings

logger = logging.getLogger(__name__)


class GitHubContentRepo:
    """
    Reads markdown posts from a directory of a GitHub repository through the
    contents API.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: Optional[TTLCache] = None,
        config: Settings = settings,
    ):
        self.client = client
        self.cache = cache if cache is not None else TTLCache()
        self.config = config
        self.base_url = config.github_repo_api_url
        self.posts_path = config.GITHUB_POSTS_PATH.strip("/")
        self.headers = {"Accept": "application/vnd.github.v3+json"}
        if config.GITHUB_TOKEN:
            self.headers["Authorization"] = f"token {config.GITHUB_TOKEN}"

    async def list_post_files(self) -> List[dict]:
        """Get all markdown files from the posts directory."""
        cache_key = f"list:{self.posts_path}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await self.client.get(
                f"{self.base_url}/contents/{self.posts_path}", headers=self.headers
            )
            response.raise_for_status()
            files = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GitHub API error listing posts: {e.response.status_code}")
            return []
        except (httpx.RequestError, ValueError) as e:
            logger.error(f"Error fetching post files: {e}")
            return []

        if not isinstance(files, list):
            logger.error(f"Unexpected listing payload for {self.posts_path}")
            return []

        md_files = [
            f
            for f in files
            if isinstance(f, dict)
            and f.get("type", "file") == "file"
            and str(f.get("name", "")).endswith(".md")
        ]
        self.cache.set(cache_key, md_files, self.config.LIST_CACHE_TTL_SECONDS)
        return md_files

    async def get_file_content(self, path: str) -> Optional[str]:
        """Get the text content of a single file, or None if unavailable."""
        cache_key = f"file:{path}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {path}")
            return cached

        try:
            response = await self.client.get(
                f"{self.base_url}/contents/{path}", headers=self.headers
            )
            response.raise_for_status()
            file = response.json()

            content = None
            if file.get("content") and file.get("encoding") == "base64":
                content = _decode_base64(file["content"])
            elif file.get("download_url"):
                # Larger files come without inlined content
                raw = await self.client.get(file["download_url"])
                raw.raise_for_status()
                content = raw.content.decode("utf-8", errors="replace")
        except httpx.HTTPStatusError as e:
            logger.warning(f"GitHub API error for {path}: {e.response.status_code}")
            return None
        except (httpx.RequestError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Error fetching file content for {path}: {e}")
            return None

        if content is None:
            return None
        self.cache.set(cache_key, content, self.config.FILE_CACHE_TTL_SECONDS)
        return content

    async def get_all_posts(self) -> List[RemotePost]:
        files = await self.list_post_files()
        paths = [f.get("path") or f"{self.posts_path}/{f['name']}" for f in files]
        contents = await asyncio.gather(*(self.get_file_content(p) for p in paths))
        fetched_at = _now_iso()
        return [
            RemotePost(
                slug=f["name"].removesuffix(".md"),
                content=content,
                path=path,
                lastModified=fetched_at,
            )
            for f, path, content in zip(files, paths, contents)
            if content
        ]

    async def get_post_by_slug(self, slug: str) -> Optional[RemotePost]:
        path = f"{self.posts_path}/{slug}.md"
        content = await self.get_file_content(path)
        if not content:
            return None
        return RemotePost(slug=slug, content=content, path=path, lastModified=_now_iso())


def _decode_base64(data: str) -> str:
    # GitHub wraps base64 payloads at 60 columns
    raw = base64.b64decode("".join(data.split()))
    return raw.decode("utf-8", errors="replace")


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()
