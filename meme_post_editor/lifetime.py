import asyncio
import logging

logger = logging.getLogger(__name__)


class ViewLifetime:
    """
    Cancellation token for one page activation.

    Work started on behalf of the page is tracked here; `close()` cancels
    whatever is still pending and flips `active`, which completion handlers
    check before touching page state.
    """

    def __init__(self) -> None:
        self._active: bool = True
        self._tasks: set[asyncio.Task] = set()

    @property
    def active(self) -> bool:
        return self._active

    def track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        if not self._active:
            return
        self._active = False
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.info(f"View closed, cancelled {len(pending)} pending task(s)")
