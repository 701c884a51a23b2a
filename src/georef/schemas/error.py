"""Error response schemas.

Every error response uses the same envelope:
{"error": {"status": "...", "code": "...", "message": "...", "hint": "..."}}.
HttpError.into_response() is the only place these are constructed.
"""

from typing import Literal

from pydantic import BaseModel


class ResponseDetails(BaseModel):
    """Inner error object.

    ``status`` is "fail" for client-caused errors (400, 409) and "error"
    for everything else. ``code`` is the HTTP status as a string.
    """

    status: Literal["fail", "error"]
    code: str
    message: str
    hint: str


class Response(BaseModel):
    """Top-level error envelope returned by all error responses."""

    error: ResponseDetails
