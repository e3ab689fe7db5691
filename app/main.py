import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.cache import TTLCache
from app.routers import content, posts, site
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="TapsTechie Blog API", description="Markdown tech blog backed by GitHub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cache = TTLCache()
    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
        follow_redirects=True,
    )
    logger.info(
        f"Serving posts from {settings.GITHUB_OWNER}/{settings.GITHUB_REPO}:"
        f"{settings.GITHUB_POSTS_PATH}"
    )

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("HTTP client closed")


app.router.lifespan_context = lifespan

app.include_router(content.router)
app.include_router(posts.router)
app.include_router(site.router)


@app.get("/")
async def root():
    return {"message": "Blog API is running"}
