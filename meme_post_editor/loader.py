# meme_post_editor/loader.py
import asyncio
import logging
from typing import Callable, Optional

from meme_post_editor.errors import FetchError
from meme_post_editor.graphql_client import PostApi
from meme_post_editor.lifetime import ViewLifetime
from meme_post_editor.route_params import INVALID_POST_ID
from meme_post_editor.view_state import LoadResult

logger = logging.getLogger(__name__)


class PostLoader:
    """
    Fetches the post being edited and keeps the latest LoadResult.

    One fetch per identifier: asking again for the identifier that is already
    loading or loaded reuses that fetch. Results for an identifier that is no
    longer current, or that land after the view was closed, are dropped.
    """

    def __init__(
        self,
        api: PostApi,
        lifetime: ViewLifetime,
        on_change: Optional[Callable[[LoadResult], None]] = None,
    ):
        self.api: PostApi = api
        self.lifetime: ViewLifetime = lifetime
        self.on_change = on_change
        self.post_id: int = INVALID_POST_ID
        self.result: LoadResult = LoadResult()
        self._task: Optional[asyncio.Task] = None

    def request(self, post_id: int) -> Optional[asyncio.Task]:
        """Starts loading `post_id` (if needed) without waiting. Returns the fetch task, if any."""
        if not self.lifetime.active:
            return None

        if post_id == self.post_id:
            return self._task

        self.post_id = post_id
        self._task = None

        if post_id == INVALID_POST_ID:
            # Nothing to fetch: fall through to "not found" instead of loading forever
            self._set_result(LoadResult())
            return None

        # Keep stale data/error around; the view-state order hides them while fetching
        self._set_result(
            LoadResult(data=self.result.data, fetching=True, error=self.result.error)
        )
        self._task = self.lifetime.track(asyncio.create_task(self._fetch(post_id)))
        return self._task

    async def load(self, post_id: int) -> LoadResult:
        """Requests `post_id` and waits until that fetch has settled."""
        task = self.request(post_id)
        if task is not None:
            # wait() instead of await: a cancelled fetch must not cancel the caller
            await asyncio.wait({task})
        return self.result

    async def _fetch(self, post_id: int) -> None:
        try:
            post = await self.api.fetch_post_by_id(post_id)
        except FetchError as e:
            logger.warning(f"Could not load post {post_id}: {e.message}")
            self._apply(post_id, LoadResult(error=e))
            return
        except Exception as e:
            # Never leave the page on "Loading..." because of an unexpected failure
            logger.exception(f"Unexpected failure loading post {post_id}")
            self._apply(post_id, LoadResult(error=FetchError(f"[Network] {e}")))
            return
        if post is None:
            logger.info(f"Post {post_id} not found")
        self._apply(post_id, LoadResult(data=post))

    def _apply(self, post_id: int, result: LoadResult) -> None:
        if not self.lifetime.active:
            logger.info(f"Dropping result for post {post_id}: view closed")
            return
        if post_id != self.post_id:
            logger.info(f"Dropping stale result for post {post_id}")
            return
        self._set_result(result)

    def _set_result(self, result: LoadResult) -> None:
        self.result = result
        if self.on_change:
            self.on_change(result)
