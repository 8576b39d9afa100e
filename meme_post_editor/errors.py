# meme_post_editor/errors.py
from typing import Optional


class FetchError(Exception):
    """Loading a post from the API failed. `message` is shown to the user as-is."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SubmissionError(Exception):
    """The update mutation failed or was refused by the API."""

    def __init__(self, post_id: Optional[int] = None, message: Optional[str] = None):
        if message:
            self.message = message
        elif post_id is not None:
            self.message = f"Could not update post {post_id}."
        else:
            self.message = "Could not update post."

        super().__init__(self.message)


class RequiredFieldError(Exception):
    """A form field was left empty. Rendered inline next to the field."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequiredFieldError):
            return NotImplemented
        return (self.field, self.message) == (other.field, other.message)

    def __hash__(self) -> int:
        return hash((self.field, self.message))


class LoginRequired(Exception):
    """
    Raised by the auth guard when there is no logged-in user.
    `next_path` is where the login page should send the user afterwards.
    """

    def __init__(self, next_path: str):
        self.next_path = next_path
        self.message = f"Login required for {next_path}"
        super().__init__(self.message)
