# test/conftest.py
import asyncio
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from meme_post_editor import main
from meme_post_editor.models import PostRecord
from meme_post_editor.routes.edit_post import get_post_api


class FakePostApi:
    """
    In-memory stand-in for the posts GraphQL API.

    Set `fetch_gate` / `update_gate` to an asyncio.Event to hold a call in
    flight until the test releases it.
    """

    def __init__(self, posts: Optional[dict[int, PostRecord]] = None):
        self.posts: dict[int, PostRecord] = dict(posts or {})
        self.user: Optional[dict] = {"id": 1, "username": "ben"}

        self.fetch_calls: list[int] = []
        self.update_calls: list[tuple[int, str, str]] = []
        self.auth_calls: int = 0

        self.fetch_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None
        self.auth_error: Optional[Exception] = None

        self.fetch_gate: Optional[asyncio.Event] = None
        self.update_gate: Optional[asyncio.Event] = None

    async def fetch_post_by_id(self, post_id: int) -> Optional[PostRecord]:
        self.fetch_calls.append(post_id)
        if self.fetch_gate is not None:
            await self.fetch_gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.posts.get(post_id)

    async def update_post(self, post_id: int, title: str, text: str) -> None:
        self.update_calls.append((post_id, title, text))
        if self.update_gate is not None:
            await self.update_gate.wait()
        if self.update_error is not None:
            raise self.update_error
        self.posts[post_id] = self.posts[post_id].model_copy(
            update={"title": title, "text": text}
        )

    async def current_user(self) -> Optional[dict]:
        self.auth_calls += 1
        if self.auth_error is not None:
            raise self.auth_error
        return self.user


@pytest.fixture
def cat_post() -> PostRecord:
    return PostRecord(id=42, title="Cat", text="Funny cat", points=3, creatorId=1)


@pytest.fixture
def dog_post() -> PostRecord:
    return PostRecord(id=43, title="Dog", text="Good dog")


@pytest.fixture
def api(cat_post, dog_post) -> FakePostApi:
    return FakePostApi({cat_post.id: cat_post, dog_post.id: dog_post})


@pytest_asyncio.fixture(scope="function")
async def client(api):
    """
    AsyncClient against the app with the posts API replaced by `api`.
    Redirects are not followed so tests can inspect them.
    """
    main.app.dependency_overrides[get_post_api] = lambda: api

    transport = ASGITransport(app=main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    main.app.dependency_overrides.clear()
