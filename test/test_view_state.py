# test/test_view_state.py
import pytest

from meme_post_editor.errors import FetchError
from meme_post_editor.models import PostRecord
from meme_post_editor.view_state import (
    Errored,
    LoadResult,
    Loading,
    NotFound,
    Ready,
    select_view_state,
)

POST = PostRecord(id=1, title="t", text="x")
ERROR = FetchError("[Network] boom")


@pytest.mark.parametrize(
    "result, expected",
    [
        (LoadResult(fetching=True), Loading()),
        (LoadResult(fetching=True, error=ERROR), Loading()),
        (LoadResult(fetching=True, data=POST), Loading()),
        (LoadResult(fetching=True, data=POST, error=ERROR), Loading()),
        (LoadResult(error=ERROR), Errored("[Network] boom")),
        (LoadResult(data=POST, error=ERROR), Errored("[Network] boom")),
        (LoadResult(), NotFound()),
        (LoadResult(data=POST), Ready(POST)),
    ],
)
def test_precedence(result, expected):
    assert select_view_state(result) == expected


def test_same_input_same_output():
    result = LoadResult(data=POST)
    assert select_view_state(result) == select_view_state(result)
    assert select_view_state(LoadResult(error=ERROR)) == select_view_state(
        LoadResult(error=FetchError("[Network] boom"))
    )
