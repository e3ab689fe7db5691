import datetime
import logging
from typing import Iterable, List
from xml.etree import ElementTree as ET

from app.schemas.blog import PostMetadata
from app.schemas.site import (
    AboutInfo,
    AdminDashboard,
    AdminLink,
    OpenGraph,
    OpenGraphImage,
    SEOMetadata,
    SitemapEntry,
    TwitterCard,
)
from app.services.text_repair import split_title
from app.settings import Settings, settings

logger = logging.getLogger(__name__)

OG_IMAGE_PATH = "/og-image.png"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def default_seo(config: Settings = settings) -> SEOMetadata:
    image = f"{config.BASE_SITE_URL}{OG_IMAGE_PATH}"
    return SEOMetadata(
        title=config.SITE_TITLE,
        description=config.SITE_DESCRIPTION,
        canonical=config.BASE_SITE_URL,
        openGraph=OpenGraph(
            title=config.SITE_TITLE,
            description=config.SITE_DESCRIPTION,
            images=[OpenGraphImage(url=image, alt=config.SITE_TITLE)],
        ),
        twitter=TwitterCard(
            site=config.TWITTER_HANDLE, creator=config.TWITTER_HANDLE
        ),
    )


def build_post_seo(post: PostMetadata, config: Settings = settings) -> SEOMetadata:
    title = post.seoTitle or post.title
    description = post.seoDescription or post.excerpt
    image = post.cover or f"{config.BASE_SITE_URL}{OG_IMAGE_PATH}"
    return SEOMetadata(
        title=title,
        description=description,
        canonical=f"{config.BASE_SITE_URL}/blog/{post.slug}",
        openGraph=OpenGraph(
            title=title,
            description=description,
            type="article",
            publishedTime=post.datePublished or post.date,
            authors=[post.author],
            tags=post.tags,
            images=[OpenGraphImage(url=image, alt=post.title)],
        ),
        twitter=TwitterCard(
            title=title,
            description=description,
            site=config.TWITTER_HANDLE,
            creator=config.TWITTER_HANDLE,
            images=[image],
        ),
    )


def build_sitemap_entries(
    posts: Iterable[PostMetadata], config: Settings = settings
) -> List[SitemapEntry]:
    base_url = config.BASE_SITE_URL.rstrip("/")
    today = datetime.datetime.now(datetime.timezone.utc).date().isoformat()

    static_entries = [
        SitemapEntry(
            url=base_url, lastModified=today, changeFrequency="daily", priority=1.0
        ),
        SitemapEntry(
            url=f"{base_url}/about",
            lastModified=today,
            changeFrequency="monthly",
            priority=0.5,
        ),
    ]
    post_entries = [
        SitemapEntry(
            url=f"{base_url}/blog/{post.slug}",
            lastModified=post.date,
            changeFrequency="weekly",
            priority=0.8,
        )
        for post in posts
    ]
    return static_entries + post_entries


def render_sitemap(entries: Iterable[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.lastModified
        ET.SubElement(url, "changefreq").text = entry.changeFrequency
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def build_admin_dashboard(
    posts: Iterable[PostMetadata], config: Settings = settings
) -> AdminDashboard:
    """Links into GitHub's web UI for writing and editing posts."""
    repo_url = config.github_web_url
    posts_path = config.GITHUB_POSTS_PATH.strip("/")
    branch = config.GITHUB_BRANCH
    links = []
    for post in posts:
        clean, emoji = split_title(post.title)
        links.append(
            AdminLink(
                slug=post.slug,
                title=post.title,
                cleanTitle=clean or post.title,
                emoji=emoji,
                editUrl=f"{repo_url}/edit/{branch}/{posts_path}/{post.slug}.md",
                viewUrl=f"{config.BASE_SITE_URL.rstrip('/')}/blog/{post.slug}",
            )
        )
    return AdminDashboard(
        repositoryUrl=repo_url,
        newPostUrl=f"{repo_url}/new/{branch}/{posts_path}",
        posts=links,
    )


def build_about(config: Settings = settings) -> AboutInfo:
    return AboutInfo(
        name=config.DEFAULT_AUTHOR,
        title=config.SITE_TITLE,
        description=config.SITE_DESCRIPTION,
        twitter=config.TWITTER_HANDLE or None,
        github=f"https://github.com/{config.GITHUB_OWNER}",
    )
