import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app import dependencies as deps
from app.schemas.site import AboutInfo, AdminDashboard, SEOMetadata
from app.security import get_api_key
from app.services.posts_service import PostsService
from app.services.site_service import (
    build_about,
    build_admin_dashboard,
    build_sitemap_entries,
    default_seo,
    render_sitemap,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/about", response_model=AboutInfo)
def about():
    return build_about()


@router.get("/seo", response_model=SEOMetadata)
def site_seo():
    return default_seo()


@router.get("/sitemap.xml")
async def sitemap(service: PostsService = Depends(deps.get_posts_service)):
    try:
        posts = await service.get_all_posts()
    except Exception as e:
        logger.error(f"Failed to load posts for sitemap: {e}")
        posts = []
    xml = render_sitemap(build_sitemap_entries(posts))
    return Response(content=xml, media_type="application/xml")


@router.get(
    "/admin",
    response_model=AdminDashboard,
    dependencies=[Depends(get_api_key)],
)
async def admin_dashboard(service: PostsService = Depends(deps.get_posts_service)):
    try:
        posts = await service.get_all_posts()
    except Exception as e:
        logger.error(f"Unexpected error building admin dashboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to load dashboard")
    return build_admin_dashboard(posts)


@router.post(
    "/admin/cache/invalidate",
    dependencies=[Depends(get_api_key)],
)
def invalidate_cache(service: PostsService = Depends(deps.get_posts_service)):
    """Force the next listing to go back to the content repository."""
    service.invalidate_cache()
    return {"invalidated": True}
