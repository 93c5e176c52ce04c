import re

CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')

MAX_SEARCH_LENGTH = 200
LIKE_ESCAPE = "\\"


def sanitize_search(text: str | None) -> str:
    """Clean a free-text search term. Returns "" when nothing usable is left."""
    if not text:
        return ""

    text = CONTROL_CHARS_PATTERN.sub('', text).strip()

    if len(text) > MAX_SEARCH_LENGTH:
        text = text[:MAX_SEARCH_LENGTH]

    return text


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(text: str) -> str:
    return f"%{escape_like(text)}%"
