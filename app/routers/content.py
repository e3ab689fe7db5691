import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app import dependencies as deps
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/content")
async def get_content(
    slug: Optional[str] = Query(default=None),
    list_: Optional[str] = Query(default=None, alias="list"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Raw content endpoint: `?list=1` for all posts, `?slug=<id>` for one."""
    try:
        if list_ == "1":
            posts = await service.get_all_posts()
            return JSONResponse(jsonable_encoder(posts), status_code=200)

        if slug:
            post = await service.get_post_by_slug(slug)
            if not post:
                return JSONResponse({"error": "Not found"}, status_code=404)
            return JSONResponse(jsonable_encoder(post), status_code=200)

        return JSONResponse({"error": "Bad request"}, status_code=400)
    except Exception as e:
        logger.error(f"API /api/content error: {e}")
        return JSONResponse({"error": str(e) or "Internal error"}, status_code=500)
