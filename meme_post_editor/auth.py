# meme_post_editor/auth.py
import logging
from urllib.parse import quote

from meme_post_editor.errors import LoginRequired
from meme_post_editor.graphql_client import PostApi

logger = logging.getLogger(__name__)


async def require_auth(api: PostApi, path: str) -> dict:
    """
    Makes sure someone is logged in before the page shows anything.

    The session is whatever cookie the browser sent; the API tells us who it
    belongs to. No user means LoginRequired, which the app turns into a
    redirect to the login page. API failures (FetchError) propagate as-is.
    """
    user = await api.current_user()
    if not user:
        logger.info(f"Anonymous request for {path}, sending to login")
        raise LoginRequired(path)
    return user


def login_redirect_url(login_path: str, next_path: str) -> str:
    return f"{login_path}?next={quote(next_path, safe='')}"
