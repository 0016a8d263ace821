import re
from typing import Callable, Optional

import pyperclip
from bs4 import BeautifulSoup

from config import logger
from exceptions import ClipboardUnavailableException

ClipboardWriter = Callable[[str], None]

BLOCK_TAGS = [
    "p", "div", "li", "br", "pre", "blockquote", "tr",
    "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "table",
]

_BLANK_LINES = re.compile(r"\n\s*\n+")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")


def strip_markup(markup_or_text: Optional[str]) -> str:
    """Reduce rendered HTML (or plain text) to its visible text, one block per line."""
    if not markup_or_text:
        return ""
    soup = BeautifulSoup(markup_or_text, "html.parser")
    for element in soup.find_all(BLOCK_TAGS):
        element.insert_after("\n")
    text = _TRAILING_SPACE.sub("\n", soup.get_text())
    return _BLANK_LINES.sub("\n\n", text).strip()


def _write(text: str, writer: Optional[ClipboardWriter]) -> None:
    try:
        (writer or pyperclip.copy)(text)
    except Exception as e:
        raise ClipboardUnavailableException(str(e) or type(e).__name__) from e


def copy_plain_text(markup_or_text: Optional[str], writer: Optional[ClipboardWriter] = None) -> bool:
    """
    Strip markup and put the plain text on the system clipboard.
    Args:
        markup_or_text: Rendered analysis (HTML) or plain text
        writer: Clipboard write function; defaults to ``pyperclip.copy``
    Returns:
        True when the text was written, False when the clipboard write failed
    """
    text = strip_markup(markup_or_text)
    try:
        _write(text, writer)
    except ClipboardUnavailableException as e:
        logger.warning("Failed to copy analysis: %s", e.message, extra={"error": e.to_dict()})
        return False
    return True
