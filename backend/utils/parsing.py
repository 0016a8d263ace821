import re
from typing import Optional, Pattern


def tag_pattern(name: str, value: str = r"(.*?)") -> Pattern[str]:
    """Build a regex matching a bracketed ``[NAME: value]`` header tag."""
    return re.compile(r"\[" + re.escape(name) + r":\s*" + value + r"\]")


def extract_tag_value(text: str, pattern: Pattern[str]) -> Optional[str]:
    """Return the stripped first capture of ``pattern`` in ``text``, if any."""
    if not text:
        return None
    m = pattern.search(text)
    if not m:
        return None
    return m.group(1).strip()


def text_after_marker(text: str, marker: str) -> Optional[str]:
    """Return everything after the first ``marker``, trimmed, or None when absent."""
    if not text:
        return None
    idx = text.find(marker)
    if idx == -1:
        return None
    return text[idx + len(marker):].strip()


def parse_int_value(val: Optional[str]) -> Optional[int]:
    if val is None:
        return None
    try:
        return int(str(val).strip(), 10)
    except (ValueError, TypeError):
        return None


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
