import logging
import unicodedata
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class LocalPostsRepo:
    def __init__(self, posts_dir: str | Path):
        self.posts_dir = Path(posts_dir)

    def candidate_paths(self, slug: str) -> List[Path]:
        return [self.posts_dir / f"{slug}.md", self.posts_dir / slug]

    def read_post(self, slug: str) -> Optional[str]:
        """Return the first readable candidate file for a slug."""
        if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
            logger.warning(f"Rejected local lookup for slug {slug!r}")
            return None

        for path in self.candidate_paths(slug):
            try:
                if not path.is_file():
                    continue
                text = path.read_bytes().decode("utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Failed to read local post {path}: {e}")
                continue
            if text:
                return unicodedata.normalize("NFC", text)
        return None
