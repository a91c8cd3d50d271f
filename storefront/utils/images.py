# storefront/utils/images.py
import re

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_PLAIN_HTTP = re.compile(r"^http://", re.IGNORECASE)


def safe_image_url(src) -> str | None:
    """Tylko https albo sciezka od roota, reszta odpada."""
    if not isinstance(src, str):
        return None
    trimmed = src.strip()
    if not trimmed:
        return None
    if trimmed.startswith("//"):
        return f"https:{trimmed}"
    if _ABSOLUTE_URL.match(trimmed):
        return _PLAIN_HTTP.sub("https://", trimmed, count=1)
    if trimmed.startswith("/"):
        return trimmed
    return None
