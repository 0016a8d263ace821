from .parsing import tag_pattern, extract_tag_value, text_after_marker, parse_int_value, clamp
from .validation import InputValidator

__all__ = [
    "tag_pattern",
    "extract_tag_value",
    "text_after_marker",
    "parse_int_value",
    "clamp",
    "InputValidator",
]
