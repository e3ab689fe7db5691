import logging
import re
import unicodedata
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Characters that show up when UTF-8 bytes were decoded as Latin-1/cp1252
MOJIBAKE_MARKERS = re.compile("[\u00c3\u00c2\u00f0\ufffd]")

EMOJI_PASSTHROUGH = (
    "🛡️", "🛳️", "👉", "✅", "❌", "🔧", "🚀", "💡", "⚡", "🎯", "📊", "🔍",
    "💻", "🎉", "🏗️", "🔥", "💪", "🤖", "📚", "⭐", "🌟", "😄", "😉", "🕺",
)
EMOJI_MAP = {emoji: emoji for emoji in EMOJI_PASSTHROUGH}

LEADING_EMOJI = re.compile(
    "^(?:[\U0001F600-\U0001F64F]|[\U0001F300-\U0001F5FF]|[\U0001F680-\U0001F6FF]"
    "|[\U0001F1E0-\U0001F1FF]|[\u2600-\u26FF]|[\u2700-\u27BF])\ufe0f?"
)
LEADING_SYMBOLS = re.compile(r"^[^\w\s]+")


def fix_mojibake(text: str) -> str:
    """
    Best-effort repair of UTF-8 text that was mis-decoded as Latin-1.
    Only fires when one of the marker characters is present.
    """
    if not text or not MOJIBAKE_MARKERS.search(text):
        return text
    raw = bytes(_as_byte(ch) for ch in text)
    repaired = unicodedata.normalize("NFC", raw.decode("utf-8", errors="replace"))
    logger.debug("Repaired mojibake in text")
    return repaired


def _as_byte(ch: str) -> int:
    code = ord(ch)
    if code <= 0xFF:
        return code
    # cp1252 puts printable characters in 0x80-0x9F (e.g. "Ÿ" for 0x9F)
    try:
        encoded = ch.encode("cp1252")
    except UnicodeEncodeError:
        return code & 0xFF
    return encoded[0] if len(encoded) == 1 else code & 0xFF


def process_emojis(text: str) -> str:
    processed = text
    for emoji, replacement in EMOJI_MAP.items():
        processed = processed.replace(emoji, replacement)
    return processed


def extract_emoji(title: str) -> Optional[str]:
    match = LEADING_EMOJI.match(title)
    return match.group(0) if match else None


def clean_title(title: str) -> str:
    """Strip a leading emoji and punctuation from a title for display."""
    title = LEADING_EMOJI.sub("", title)
    title = LEADING_SYMBOLS.sub("", title)
    return title.strip()


def split_title(title: str) -> Tuple[str, Optional[str]]:
    return clean_title(title), extract_emoji(title)
