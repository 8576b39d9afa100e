# meme_post_editor/navigation.py
import logging
from typing import Optional
from urllib.parse import quote, urlsplit

logger = logging.getLogger(__name__)


def post_href(post_id: int) -> str:
    """Link to a post's own page, used by the Cancel button."""
    return f"/post/{quote(str(post_id), safe='')}"


def safe_back_target(
    raw: Optional[str], host: Optional[str] = None, exclude: Optional[str] = None
) -> Optional[str]:
    """
    Reduces a Referer-style URL to a same-site path we are willing to redirect to.

    Absolute URLs are accepted only when they point at `host`; relative ones must
    be rooted paths ("//evil.example" is not). `exclude` drops a path we must not
    go back to, such as the edit page itself.
    """
    if not raw:
        return None
    parts = urlsplit(raw.strip())
    if parts.scheme or parts.netloc:
        if parts.scheme not in ("http", "https") or not host or parts.netloc != host:
            return None
    path = parts.path or "/"
    if not path.startswith("/") or path.startswith("//"):
        return None
    if exclude and path.rstrip("/") == exclude.rstrip("/"):
        return None
    return f"{path}?{parts.query}" if parts.query else path


class Navigator:
    """
    Back-stack navigation for one page activation.

    The page the user came from is remembered as `back_target`; `go_back()`
    marks that navigation happened and returns where to go.
    """

    def __init__(self, back: Optional[str] = None, fallback: str = "/"):
        self.back: Optional[str] = back
        # Where to go when we don't know where the user came from
        self.fallback: str = fallback
        self.went_back: bool = False

    @property
    def back_target(self) -> str:
        return self.back or self.fallback

    def go_back(self) -> str:
        self.went_back = True
        logger.info(f"Navigating back to {self.back_target}")
        return self.back_target

    def link_to(self, path: str) -> str:
        return path if path.startswith("/") else f"/{path}"
