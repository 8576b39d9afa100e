# meme_post_editor/form.py
import enum
import logging
from typing import Optional

from meme_post_editor.errors import RequiredFieldError, SubmissionError
from meme_post_editor.graphql_client import PostApi
from meme_post_editor.lifetime import ViewLifetime
from meme_post_editor.models import FormValues, PostRecord
from meme_post_editor.navigation import Navigator

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES: dict[str, str] = {
    "title": "please enter a title",
    "text": "please enter some text",
}


class SubmissionState(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


def validate_field(name: str, value: str) -> Optional[RequiredFieldError]:
    if name in REQUIRED_MESSAGES and not value:
        return RequiredFieldError(name, REQUIRED_MESSAGES[name])
    return None


def validate_values(values: FormValues) -> dict[str, RequiredFieldError]:
    """Both fields are required; nothing else is checked."""
    errors: dict[str, RequiredFieldError] = {}
    for name in REQUIRED_MESSAGES:
        error = validate_field(name, getattr(values, name))
        if error:
            errors[name] = error
    return errors


class FormController:
    """
    Draft, field errors and submission state of the edit form.

    The draft is seeded from the loaded post and re-seeded only when a
    different post shows up, so edits survive a refresh of the same post.
    """

    def __init__(
        self,
        api: PostApi,
        navigator: Navigator,
        lifetime: ViewLifetime,
    ):
        self.api: PostApi = api
        self.navigator: Navigator = navigator
        self.lifetime: ViewLifetime = lifetime

        self.post_id: Optional[int] = None
        self.draft: FormValues = FormValues()
        self.errors: dict[str, RequiredFieldError] = {}
        self.state: SubmissionState = SubmissionState.IDLE
        self.submit_error: Optional[str] = None

    @property
    def seeded(self) -> bool:
        return self.post_id is not None

    @property
    def submitting(self) -> bool:
        return self.state is SubmissionState.SUBMITTING

    @property
    def can_cancel(self) -> bool:
        return not self.submitting

    @property
    def submit_label(self) -> str:
        return "Updating Post..." if self.submitting else "Update Post"

    def sync_with(self, post: Optional[PostRecord]) -> None:
        if post is None or post.id == self.post_id:
            return
        if self.seeded:
            logger.info(f"Post changed {self.post_id} -> {post.id}, resetting draft")
        self.post_id = post.id
        self.draft = FormValues(title=post.title, text=post.text)
        self.errors = {}
        self.submit_error = None
        self.state = SubmissionState.IDLE

    def set_field(self, name: str, value: str) -> None:
        if name not in REQUIRED_MESSAGES:
            raise KeyError(f"Unknown form field {name!r}")
        self.draft = self.draft.model_copy(update={name: value})
        # Only fields already showing an error are re-checked while typing
        if name in self.errors:
            error = validate_field(name, value)
            if error:
                self.errors[name] = error
            else:
                del self.errors[name]

    def set_values(self, values: FormValues) -> None:
        for name in REQUIRED_MESSAGES:
            self.set_field(name, getattr(values, name))

    def validate(self) -> bool:
        self.errors = validate_values(self.draft)
        return not self.errors

    async def submit(self) -> bool:
        """
        Validates and sends the draft. Returns True once back-navigation fired.

        On failure the error is kept in `submit_error` and the form goes back to
        IDLE so the user can retry.
        """
        if self.submitting:
            logger.warning(f"Ignoring submit for post {self.post_id}: already submitting")
            return False
        if self.post_id is None:
            logger.warning("Ignoring submit: no post loaded")
            return False
        if not self.validate():
            logger.info(
                f"Post {self.post_id} form invalid: {', '.join(sorted(self.errors))}"
            )
            return False

        post_id = self.post_id
        values = self.draft
        self.submit_error = None
        self.state = SubmissionState.SUBMITTING

        try:
            await self.api.update_post(post_id, values.title, values.text)
        except SubmissionError as e:
            if not self.lifetime.active:
                return False
            logger.error(f"Updating post {post_id} failed: {e.message}")
            self.submit_error = e.message
            self.state = SubmissionState.IDLE
            return False

        if not self.lifetime.active:
            logger.info(f"Post {post_id} updated after view closed, not navigating")
            return False

        logger.info(f"Post {post_id} updated")
        # State stays SUBMITTING: the page is left right away
        self.navigator.go_back()
        return True
