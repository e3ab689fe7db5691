from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # GitHub content repository
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_OWNER: str = "tarunsha009"
    GITHUB_REPO: str = "taps-techie-blog"
    GITHUB_BRANCH: str = "main"
    GITHUB_POSTS_PATH: str = "public/content/posts"
    GITHUB_TOKEN: str = ""  # optional for public repos

    # Local fallback
    LOCAL_POSTS_DIR: str = "public/content/posts"
    LOCAL_FALLBACK_SLUGS: List[str] = [
        "event-order",
        "Bulkhead-Pattern",
        "python-magic-methods",
    ]

    # Posts
    DEFAULT_AUTHOR: str = "Tarun"

    # Caching (seconds)
    POSTS_CACHE_TTL_SECONDS: float = 300
    LIST_CACHE_TTL_SECONDS: float = 60
    FILE_CACHE_TTL_SECONDS: float = 300

    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Site
    BASE_SITE_URL: str = "https://taps-techie-blog.vercel.app"
    SITE_TITLE: str = "TapsTechie - Tech Blog"
    SITE_DESCRIPTION: str = (
        "Senior Software Engineer sharing insights on Python, Java, "
        "and backend development"
    )
    TWITTER_HANDLE: str = "@tarunsha009"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Admin API Key
    BLOG_ADMIN_KEY: str = ""

    @property
    def github_repo_api_url(self) -> str:
        return f"{self.GITHUB_API_URL.rstrip('/')}/repos/{self.GITHUB_OWNER}/{self.GITHUB_REPO}"

    @property
    def github_web_url(self) -> str:
        return f"https://github.com/{self.GITHUB_OWNER}/{self.GITHUB_REPO}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
