# meme_post_editor/page.py
"""
The "Edit Post" page.

One EditPostPage lives for one activation (one HTTP request here). It wires the
auth guard, the post loader, the form controller and back-navigation together,
and renders whichever of the four view states applies.
"""
import logging
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from meme_post_editor.auth import require_auth
from meme_post_editor.errors import FetchError
from meme_post_editor.form import FormController
from meme_post_editor.graphql_client import PostApi
from meme_post_editor.lifetime import ViewLifetime
from meme_post_editor.loader import PostLoader
from meme_post_editor.models import FormValues
from meme_post_editor.navigation import Navigator, post_href
from meme_post_editor.route_params import INVALID_POST_ID, parse_post_id
from meme_post_editor.view_state import (
    Errored,
    LoadResult,
    Loading,
    NotFound,
    Ready,
    ViewState,
    select_view_state,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "404: Could not find post"
LOADING_MESSAGE = "Loading..."


class EditPostPage:
    form_template = "edit_post.html"
    message_template = "page_message.html"

    def __init__(self, api: PostApi, path: str, back: Optional[str] = None):
        self.api: PostApi = api
        self.path: str = path
        self.lifetime = ViewLifetime()
        self.navigator = Navigator(back=back)
        self.form = FormController(api, self.navigator, self.lifetime)
        self.loader = PostLoader(api, self.lifetime, on_change=self._on_load)
        self.post_id: int = INVALID_POST_ID
        self.user: Optional[dict] = None
        self.auth_error: Optional[FetchError] = None

    def _on_load(self, result: LoadResult) -> None:
        state = select_view_state(result)
        if isinstance(state, Ready):
            self.form.sync_with(state.post)

    @property
    def view_state(self) -> ViewState:
        if self.auth_error is not None:
            return Errored(self.auth_error.message)
        return select_view_state(self.loader.result)

    @property
    def cancel_href(self) -> str:
        return self.navigator.link_to(post_href(self.post_id))

    async def activate(self, raw_id: Optional[str], wait: bool = True) -> ViewState:
        """
        Runs the auth guard, then loads the post named by the route parameter.

        LoginRequired propagates to the caller. With `wait=False` the fetch is
        only started and the page reports Loading until it settles.
        """
        try:
            self.user = await require_auth(self.api, self.path)
        except FetchError as e:
            logger.error(f"Auth check failed for {self.path}: {e.message}")
            self.auth_error = e
            return self.view_state

        self.post_id = parse_post_id(raw_id)
        self.navigator.fallback = post_href(self.post_id)
        if wait:
            await self.loader.load(self.post_id)
        else:
            self.loader.request(self.post_id)
        return self.view_state

    async def submit(self, values: FormValues) -> Optional[str]:
        """Applies the posted values and submits. Returns the redirect target on success."""
        if not isinstance(self.view_state, Ready):
            return None
        self.form.set_values(values)
        if await self.form.submit():
            return self.navigator.back_target
        return None

    def status_code(self) -> int:
        state = self.view_state
        if isinstance(state, Errored):
            return 502
        if isinstance(state, NotFound):
            return 404
        if isinstance(state, Ready):
            if self.form.errors:
                return 422
            if self.form.submit_error:
                return 502
        return 200

    def render(self, templates: Jinja2Templates, request: Request):
        state = self.view_state
        context = {"page": self, "state": state}

        if isinstance(state, Ready):
            return templates.TemplateResponse(
                request,
                self.form_template,
                {
                    **context,
                    "post": state.post,
                    "form": self.form,
                    "back": self.navigator.back or "",
                    "cancel_href": self.cancel_href,
                },
                status_code=self.status_code(),
            )

        if isinstance(state, Loading):
            message = LOADING_MESSAGE
        elif isinstance(state, Errored):
            message = state.message
        else:
            message = NOT_FOUND_MESSAGE

        return templates.TemplateResponse(
            request,
            self.message_template,
            {**context, "message": message, "is_error": not isinstance(state, Loading)},
            status_code=self.status_code(),
        )

    def close(self) -> None:
        self.lifetime.close()
