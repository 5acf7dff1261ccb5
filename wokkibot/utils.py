"""Small helpers: colours, text, URLs and track times."""

from __future__ import annotations

import random
import re
import string
import unicodedata
from datetime import datetime
from urllib.parse import urlsplit, urlunsplit

COLOR_DEFAULT = 0x000000
COLOR_WHITE = 0xFFFFFF
COLOR_BLACK = 0x000000
COLOR_BLUE = 0x3498DB
COLOR_RED = 0xE74C3C
COLOR_GREEN = 0x2ECC71
COLOR_YELLOW = 0xF1C40F
COLOR_PURPLE = 0x9B59B6
COLOR_ORANGE = 0xE67E22
COLOR_CYAN = 0x1ABC9C
COLOR_PINK = 0xE91E63
COLOR_BLURPLE = 0x5865F2
COLOR_GREYPLE = 0x99AAB5
COLOR_DARK = 0x2C2F33
COLOR_LIGHT = 0xFFFFFF

_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d %b %y",
    "%Y",
    "%y",
)
_YEAR_PATTERN = re.compile(r"\b(20\d{2}|19\d{2})\b")
_NAME_CHARACTERS = string.ascii_lowercase + string.ascii_uppercase + string.digits

_MINUTE_MS = 60_000
_SECOND_MS = 1_000


def rgb_to_integer(r: int, g: int, b: int) -> int:
    """Pack RGB components into one colour integer."""
    return (r << 16) + (g << 8) + b


def capitalize_first_letter(s: str) -> str:
    """Upper-case only the first character."""
    if not s:
        return ""
    return s[0].upper() + s[1:]


def extract_year(date_str: str) -> str:
    """Return the year of a date written in one of several common forms."""
    for fmt in _DATE_FORMATS:
        try:
            return str(datetime.strptime(date_str, fmt).year)
        except ValueError:
            continue
    match = _YEAR_PATTERN.search(date_str)
    if match:
        return match.group(0)
    raise ValueError("no valid year found")


def remove_diacritics(text: str) -> str:
    """Strip combining marks, leaving base letters."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def generate_random_name(length: int) -> str:
    """Return a random alphanumeric string of the given length."""
    return "".join(random.choices(_NAME_CHARACTERS, k=max(length, 0)))


def maximum_file_size(premium_tier: int) -> int:
    """Upload limit in megabytes for a guild's boost tier."""
    if premium_tier == 2:
        return 50
    if premium_tier == 3:
        return 100
    return 10


def replace_domain(original_url: str, new_domain: str) -> str:
    """Swap the host (and optional port) of a URL, keeping everything else."""
    parts = urlsplit(original_url)
    host_parts = new_domain.split(":")
    host = host_parts[0]
    port = host_parts[1] if len(host_parts) > 1 else ""
    netloc = f"{host}:{port}" if port else host
    userinfo, at, _ = parts.netloc.rpartition("@")
    if at:
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def _split_minutes(milliseconds: int) -> tuple[int, int]:
    sign = -1 if milliseconds < 0 else 1
    minutes, remainder = divmod(abs(milliseconds), _MINUTE_MS)
    return sign * minutes, sign * (remainder // _SECOND_MS)


def format_duration(milliseconds: int) -> str:
    """Describe a track length in minutes and seconds."""
    if milliseconds == 0:
        return "0 minutes 0 seconds"
    minutes, seconds = _split_minutes(milliseconds)
    minutes_text = "minutes" if minutes > 1 else "minute"
    seconds_text = "seconds" if seconds == 1 else "second"
    return f"{minutes} {minutes_text} {seconds} {seconds_text}"


def format_position(milliseconds: int) -> str:
    """Format a playback position as M:SS."""
    if milliseconds == 0:
        return "0:00"
    minutes, seconds = _split_minutes(milliseconds)
    return f"{minutes}:{seconds:02d}"