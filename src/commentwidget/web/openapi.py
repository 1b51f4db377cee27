from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Comments are unavailable right now.", "type": "storage_error"},
                {"message": "An unexpected error occurred.", "type": "internal_server_error"},
            ]
        }
    }
