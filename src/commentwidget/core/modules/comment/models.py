from pydantic import BaseModel, ConfigDict, Field

NAME_MAX_BYTES = 80
BODY_MAX_BYTES = 1000


class Comment(BaseModel):
    """Single comment, stored as one JSON object per line of the log."""

    id: str = Field(..., description="UUID v7 shaped identifier, sortable by creation time")
    name: str = Field(..., description="Display name, trimmed")
    body: str = Field(..., description="Comment text, trimmed, newlines preserved")
    created: str = Field(..., description="Creation time as YYYY-MM-DD HH:MM")

    model_config = ConfigDict(frozen=True, extra="forbid")
