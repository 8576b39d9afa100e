# meme_post_editor/graphql_client.py
"""
Client for the posts GraphQL API.

The edit page only needs three operations, so the rest of the app talks to the
API through the narrow `PostApi` interface:
1. fetch_post_by_id - the post being edited
2. update_post - the edit mutation
3. current_user - used by the auth guard

Failures are reported with the same "[Network] ..." / "[GraphQL] ..." message
prefixes the web client shows, so the page can display them verbatim.
"""
import logging
from typing import Any, Optional, Protocol

import httpx
from pydantic import ValidationError

from meme_post_editor.errors import FetchError, SubmissionError
from meme_post_editor.models import PostRecord
from meme_post_editor.perf import timed_call

logger = logging.getLogger(__name__)

POST_QUERY = """
query Post($id: Int!) {
  post(id: $id) {
    id
    title
    text
    points
    creatorId
  }
}
"""

UPDATE_POST_MUTATION = """
mutation UpdatePost($id: Int!, $title: String!, $text: String!) {
  updatePost(id: $id, title: $title, text: $text) {
    id
    title
    text
  }
}
"""

ME_QUERY = """
query Me {
  me {
    id
    username
  }
}
"""


class PostApi(Protocol):
    async def fetch_post_by_id(self, post_id: int) -> Optional[PostRecord]: ...

    async def update_post(self, post_id: int, title: str, text: str) -> None: ...

    async def current_user(self) -> Optional[dict]: ...


class GraphQLPostApi:
    """PostApi over HTTP. Cheap to build; one per request, sharing the app's httpx client."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str,
        cookie_header: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.http: httpx.AsyncClient = http
        self.url: str = url
        self.cookie_header: Optional[str] = cookie_header
        self.timeout: Optional[float] = timeout

    async def _execute(
        self, operation: str, query: str, variables: Optional[dict] = None
    ) -> dict[str, Any]:
        """Runs one GraphQL operation and returns its `data`, raising FetchError on any failure"""
        headers = {"Accept": "application/json"}
        if self.cookie_header:
            # Session lives in the browser's cookie; the API authenticates with it
            headers["Cookie"] = self.cookie_header

        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        async with timed_call(f"GraphQL {operation}", logger):
            try:
                resp = await self.http.post(
                    self.url,
                    json={
                        "operationName": operation,
                        "query": query,
                        "variables": variables or {},
                    },
                    headers=headers,
                    **kwargs,
                )
            except httpx.RequestError as e:
                raise FetchError(f"[Network] {e.__class__.__name__}: {e}") from e

            try:
                body = resp.json()
            except ValueError:
                body = None

            if isinstance(body, dict) and "errors" in body and body["errors"] is not None:
                errors = body["errors"]
                if not isinstance(errors, list) or not errors:
                    raise FetchError("[GraphQL] malformed response")
                first = errors[0]
                message = first.get("message") if isinstance(first, dict) else None
                raise FetchError(f"[GraphQL] {message or 'malformed response'}")

            if resp.is_error or not isinstance(body, dict):
                raise FetchError(f"[Network] {resp.status_code} {resp.reason_phrase}")

            data = body.get("data")
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise FetchError("[GraphQL] malformed response")
            return data

    async def fetch_post_by_id(self, post_id: int) -> Optional[PostRecord]:
        data = await self._execute("Post", POST_QUERY, {"id": post_id})
        raw = data.get("post")
        if raw is None:
            return None
        try:
            return PostRecord.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Malformed post {post_id} from API: {e}")
            raise FetchError(f"[GraphQL] malformed post {post_id}") from e

    async def update_post(self, post_id: int, title: str, text: str) -> None:
        try:
            data = await self._execute(
                "UpdatePost",
                UPDATE_POST_MUTATION,
                {"id": post_id, "title": title, "text": text},
            )
        except FetchError as e:
            raise SubmissionError(post_id, e.message) from e

        # The API answers null when the post is gone or not ours
        if data.get("updatePost") is None:
            raise SubmissionError(post_id)

    async def current_user(self) -> Optional[dict]:
        data = await self._execute("Me", ME_QUERY)
        return data.get("me")
