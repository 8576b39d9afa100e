# test/test_page.py
import asyncio

import pytest
from bs4 import BeautifulSoup
from starlette.requests import Request

from meme_post_editor.models import FormValues
from meme_post_editor.page import EditPostPage
from meme_post_editor.templating import templates
from meme_post_editor.view_state import Loading, NotFound, Ready


def make_request() -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/post/edit/42",
            "headers": [],
            "query_string": b"",
        }
    )


def rendered(page: EditPostPage) -> tuple[int, BeautifulSoup]:
    resp = page.render(templates, make_request())
    return resp.status_code, BeautifulSoup(resp.body.decode(), "html.parser")


@pytest.mark.asyncio
async def test_loading_state_renders_message(api, cat_post):
    api.fetch_gate = asyncio.Event()
    page = EditPostPage(api, path="/post/edit/42")

    assert await page.activate("42", wait=False) == Loading()
    status, soup = rendered(page)
    assert status == 200
    assert soup.select_one("#page-message").get_text(strip=True) == "Loading..."

    api.fetch_gate.set()
    await page.loader.load(42)
    assert page.view_state == Ready(cat_post)
    assert page.form.draft.title == "Cat"
    page.close()


@pytest.mark.asyncio
async def test_submitting_swaps_buttons(api):
    page = EditPostPage(api, path="/post/edit/42", back="/")
    await page.activate("42")
    api.update_gate = asyncio.Event()

    pending = asyncio.create_task(page.submit(FormValues(title="Cats!", text="Funny cat")))
    await asyncio.sleep(0)

    status, soup = rendered(page)
    assert soup.select_one("a.cancel") is None
    button = soup.select_one("button")
    assert button.has_attr("disabled")
    assert button.get_text(strip=True) == "Updating Post..."

    api.update_gate.set()
    assert await pending == "/"
    page.close()


@pytest.mark.asyncio
async def test_reactivating_with_other_post_reseeds(api, dog_post):
    page = EditPostPage(api, path="/post/edit/42")
    await page.activate("42")
    page.form.set_field("text", "my cat edit")

    await page.activate("43")

    assert page.view_state == Ready(dog_post)
    assert page.form.draft == FormValues(title="Dog", text="Good dog")
    assert page.cancel_href == "/post/43"
    page.close()


@pytest.mark.asyncio
async def test_closed_page_during_submit_does_not_navigate(api):
    page = EditPostPage(api, path="/post/edit/42", back="/")
    await page.activate("42")
    api.update_gate = asyncio.Event()

    pending = asyncio.create_task(page.submit(FormValues(title="Cats!", text="Funny cat")))
    await asyncio.sleep(0)
    page.close()
    api.update_gate.set()

    assert await pending is None
    assert not page.navigator.went_back


@pytest.mark.asyncio
async def test_submit_on_missing_post_is_ignored(api):
    page = EditPostPage(api, path="/post/edit/nope")
    assert await page.activate("nope") == NotFound()
    assert await page.submit(FormValues(title="a", text="b")) is None
    assert api.update_calls == []
    page.close()
