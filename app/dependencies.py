import httpx
from fastapi import Depends, Request

from app.cache import TTLCache
from app.repos.github_repo import GitHubContentRepo
from app.repos.local_repo import LocalPostsRepo
from app.services.content_sources import GitHubContentSource, LocalContentSource
from app.services.posts_service import PostsService
from app.settings import settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_github_repo(
    client: httpx.AsyncClient = Depends(get_http_client),
    cache: TTLCache = Depends(get_cache),
):
    return GitHubContentRepo(client, cache=cache)


def get_local_repo():
    return LocalPostsRepo(settings.LOCAL_POSTS_DIR)


def get_posts_service(
    remote_repo=Depends(get_github_repo),
    local_repo=Depends(get_local_repo),
    cache: TTLCache = Depends(get_cache),
):
    sources = [GitHubContentSource(remote_repo), LocalContentSource(local_repo)]
    return PostsService(remote_repo=remote_repo, sources=sources, cache=cache)
