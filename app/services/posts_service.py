import datetime
import logging
import math
import re
from typing import Any, Iterable, List, Optional, Sequence

import frontmatter
from dateutil import parser as date_parser

from app.cache import TTLCache
from app.schemas.blog import Post, PostMetadata
from app.services.content_sources import ContentSource
from app.services.text_repair import fix_mojibake, process_emojis
from app.settings import Settings, settings

logger = logging.getLogger(__name__)

ALL_POSTS_CACHE_KEY = "posts:all"
DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")
WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 160


class PostsService:
    """
    Loads posts from an ordered list of content sources and keeps the
    normalized collection in a short-lived cache.
    """

    def __init__(
        self,
        remote_repo,
        sources: Sequence[ContentSource],
        cache: Optional[TTLCache] = None,
        config: Settings = settings,
    ):
        self.remote_repo = remote_repo
        self.sources = list(sources)
        self.cache = cache if cache is not None else TTLCache()
        self.config = config

    async def get_post_by_slug(self, slug: str) -> Optional[Post]:
        markdown = await self._fetch_raw(slug)
        if not markdown:
            logger.error(f"Post not found: {slug}")
            return None
        return parse_post(markdown, slug, default_author=self.config.DEFAULT_AUTHOR)

    async def get_all_posts(self) -> List[PostMetadata]:
        cached = self.cache.get(ALL_POSTS_CACHE_KEY)
        if cached is not None:
            logger.debug("Serving posts from cache")
            return cached

        posts: List[PostMetadata] = []
        try:
            remote_posts = await self.remote_repo.get_all_posts()
        except Exception as e:
            logger.warning(f"Remote content not available, using fallback: {e}")
            remote_posts = []

        for remote_post in remote_posts:
            if not remote_post.content or not remote_post.slug:
                continue
            post = parse_post(
                remote_post.content,
                remote_post.slug,
                default_author=self.config.DEFAULT_AUTHOR,
            )
            if post:
                posts.append(post.metadata)

        if not posts:
            logger.info("No remote posts found, loading local fallback slugs")
            for slug in self.config.LOCAL_FALLBACK_SLUGS:
                post = await self.get_post_by_slug(slug)
                if post:
                    posts.append(post.metadata)

        posts = sort_posts(_dedupe_slugs(posts))
        if posts:
            self.cache.set(
                ALL_POSTS_CACHE_KEY, posts, self.config.POSTS_CACHE_TTL_SECONDS
            )
        return posts

    async def get_posts_by_tag(self, tag: str) -> List[PostMetadata]:
        return [p for p in await self.get_all_posts() if tag in p.tags]

    async def get_all_tags(self) -> List[str]:
        seen = {}
        for post in await self.get_all_posts():
            for tag in post.tags:
                seen.setdefault(tag, None)
        return list(seen)

    async def get_series(self, name: str) -> List[PostMetadata]:
        """Posts of a series, oldest first."""
        members = [p for p in await self.get_all_posts() if p.series == name]
        return sorted(members, key=_sort_key)

    def invalidate_cache(self) -> None:
        self.cache.invalidate(ALL_POSTS_CACHE_KEY)

    async def _fetch_raw(self, slug: str) -> Optional[str]:
        for source in self.sources:
            try:
                text = await source.fetch(slug)
            except Exception as e:
                logger.warning(f"Source {source.name} failed for {slug}: {e}")
                continue
            if text:
                logger.debug(f"Loaded {slug} from {source.name}")
                return text
        return None


def parse_post(markdown: str, slug: str, *, default_author: str) -> Optional[Post]:
    """Parse frontmatter and return a normalized post, or None if malformed."""
    try:
        parsed = frontmatter.loads(markdown)
        data = parsed.metadata or {}
        body = fix_mojibake(parsed.content)

        metadata = PostMetadata(
            title=fix_mojibake(str(data.get("title") or "Untitled")),
            date=format_date(data.get("date") or data.get("datePublished")),
            author=str(data.get("author") or default_author),
            readTime=str(data.get("readTime") or calculate_read_time(body)),
            tags=process_tags(data.get("tags")),
            difficulty=normalize_difficulty(data.get("difficulty")),
            series=_optional_str(data.get("series")),
            excerpt=str(
                data.get("excerpt")
                or data.get("seoDescription")
                or extract_excerpt(body)
            ),
            slug=slug,
            seoTitle=_optional_str(data.get("seoTitle")),
            seoDescription=_optional_str(data.get("seoDescription")),
            datePublished=_optional_str(data.get("datePublished")),
            cuid=_optional_str(data.get("cuid")),
            cover=_optional_str(data.get("cover")),
        )
        return Post(content=process_emojis(body), metadata=metadata)
    except Exception as e:
        logger.warning(f"Failed to parse post {slug}: {e}")
        return None


def format_date(value: Any) -> str:
    """Format a frontmatter date as YYYY-MM-DD (UTC), defaulting to today."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return datetime.datetime.now(datetime.timezone.utc).date().isoformat()
    return parsed.date().isoformat()


def process_tags(tags: Any) -> List[str]:
    if isinstance(tags, (list, tuple)):
        return [str(tag) for tag in tags if tag is not None]
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(",") if tag.strip()]
    return []


def normalize_difficulty(value: Any) -> str:
    if not value:
        return "Beginner"
    for level in DIFFICULTIES:
        if str(value).strip().lower() == level.lower():
            return level
    logger.warning(f"Unknown difficulty {value!r}, defaulting to Beginner")
    return "Beginner"


def calculate_read_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / WORDS_PER_MINUTE) or 1
    return f"{minutes} min read"


_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
_HEADING = re.compile(r"^\s*#{1,6}\s+", re.MULTILINE)
_BOLD = re.compile(r"(\*\*|__)(.*?)\1")
_ITALIC = re.compile(r"\*(.*?)\*")
_INLINE_CODE = re.compile(r"`(.*?)`")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_BULLET = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)
_NUMBERED = re.compile(r"^\s*\d+\.\s+", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")
# JS Date.toString() ends with a zone name, e.g. "(Coordinated Universal Time)"
_TZ_NAME_SUFFIX = re.compile(r"\s*\([^)]*\)\s*$")


def extract_excerpt(content: str, max_length: int = EXCERPT_LENGTH) -> str:
    plain = _FENCED_CODE.sub("", content)
    plain = _IMAGE.sub("", plain)
    plain = _HEADING.sub("", plain)
    plain = _BOLD.sub(r"\2", plain)
    plain = _ITALIC.sub(r"\1", plain)
    plain = _INLINE_CODE.sub(r"\1", plain)
    plain = _LINK.sub(r"\1", plain)
    plain = _BULLET.sub("", plain)
    plain = _NUMBERED.sub("", plain)
    plain = _WHITESPACE.sub(" ", plain).strip()

    if len(plain) <= max_length:
        return plain

    truncated = plain[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."


def effective_date(post: PostMetadata) -> Optional[datetime.datetime]:
    return _parse_datetime(post.datePublished or post.date)


def sort_posts(posts: Iterable[PostMetadata]) -> List[PostMetadata]:
    """Newest first; posts without a usable date go last, in input order."""
    return sorted(posts, key=_sort_key, reverse=True)


def _sort_key(post: PostMetadata) -> datetime.datetime:
    return effective_date(post) or datetime.datetime.min


def _dedupe_slugs(posts: Iterable[PostMetadata]) -> List[PostMetadata]:
    seen = set()
    unique = []
    for post in posts:
        if post.slug in seen:
            logger.warning(f"Duplicate slug {post.slug} skipped")
            continue
        seen.add(post.slug)
        unique.append(post)
    return unique


def _parse_datetime(value: Any) -> Optional[datetime.datetime]:
    """Parse to a naive UTC datetime, or None."""
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.parse(_TZ_NAME_SUFFIX.sub("", str(value)))
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return parsed


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)
