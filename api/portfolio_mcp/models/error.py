"""Error response schema for 400, 405 and 500 responses."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Simple error response: single top-level field error (string). No extra keys."""

    error: str
