import re

INVALID_POST_ID = -1

_DIGITS = re.compile(r"[0-9]+")


def parse_post_id(raw: str | None) -> int:
    """
    Turns the `id` route parameter into a post identifier.

    Anything that is not a plain base-10 non-negative integer (missing, empty,
    signed, padded, "12abc") maps to INVALID_POST_ID, which tells the loader not
    to fetch at all. Range checks are left to the API.
    """
    if not isinstance(raw, str) or not _DIGITS.fullmatch(raw):
        return INVALID_POST_ID
    return int(raw)
