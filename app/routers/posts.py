import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.blog import PostDetail, PostMetadata
from app.schemas.site import SEOMetadata
from app.services.markdown_renderer import render_markdown
from app.services.posts_service import PostsService
from app.services.site_service import build_post_seo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostMetadata])
async def list_posts(
    tag: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts metadata, newest first, optionally filtered by tag."""
    try:
        if tag:
            return await service.get_posts_by_tag(tag)
        return await service.get_all_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/tags", response_model=List[str])
async def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return await service.get_all_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/series/{name}", response_model=List[PostMetadata])
async def get_series(
    name: str, service: PostsService = Depends(deps.get_posts_service)
):
    try:
        posts = await service.get_series(name)
    except Exception as e:
        logger.error(f"Unexpected error retrieving series {name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve series")
    if not posts:
        raise HTTPException(status_code=404, detail="Series not found")
    return posts


@router.get("/posts/{slug}", response_model=PostDetail)
async def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug, with its body rendered to HTML."""
    try:
        post = await service.get_post_by_slug(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return PostDetail(
            content=post.content,
            metadata=post.metadata,
            html=render_markdown(post.content),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/posts/{slug}/seo", response_model=SEOMetadata)
async def get_post_seo(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = await service.get_post_by_slug(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return build_post_seo(post.metadata)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error building SEO for {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to build metadata")
