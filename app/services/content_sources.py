import asyncio
import logging
from typing import Optional, Protocol

from app.repos.github_repo import GitHubContentRepo
from app.repos.local_repo import LocalPostsRepo

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    name: str

    async def fetch(self, slug: str) -> Optional[str]: ...


class GitHubContentSource:
    name = "github"

    def __init__(self, repo: GitHubContentRepo):
        self.repo = repo

    async def fetch(self, slug: str) -> Optional[str]:
        post = await self.repo.get_post_by_slug(slug)
        return post.content if post else None


class LocalContentSource:
    name = "local"

    def __init__(self, repo: LocalPostsRepo):
        self.repo = repo

    async def fetch(self, slug: str) -> Optional[str]:
        return await asyncio.to_thread(self.repo.read_post, slug)
