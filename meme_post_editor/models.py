# --- Pydantic Models ---
from pydantic import BaseModel, ConfigDict, Field


class PostRecord(BaseModel):
    """A post as returned by the API. The page only reads it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    text: str
    # Owned by the API, not used by the edit page
    points: int | None = None
    creator_id: int | None = Field(default=None, alias="creatorId")


class FormValues(BaseModel):
    title: str = ""
    text: str = ""
