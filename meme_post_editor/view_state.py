# meme_post_editor/view_state.py
from dataclasses import dataclass
from typing import Optional, Union

from meme_post_editor.errors import FetchError
from meme_post_editor.models import PostRecord


@dataclass(frozen=True)
class LoadResult:
    data: Optional[PostRecord] = None
    fetching: bool = False
    error: Optional[FetchError] = None


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Errored:
    message: str


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Ready:
    post: PostRecord


ViewState = Union[Loading, Errored, NotFound, Ready]


def select_view_state(result: LoadResult) -> ViewState:
    """
    Picks what the page shows for the loader's latest result.

    Order matters: an in-flight fetch hides any error left over from a previous
    identifier, and an error is never reported as "not found".
    """
    if result.fetching:
        return Loading()
    if result.error is not None:
        return Errored(result.error.message)
    if result.data is None:
        return NotFound()
    return Ready(result.data)
