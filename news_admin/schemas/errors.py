"""
Schemas - Error Models

Structured error body returned by the backend on failed requests.
"""

from pydantic import BaseModel
from typing import List


CODE_PUBLISHER_NOT_FOUND = "CODE_PUBLISHER_NOT_FOUND"
CODE_URL_TOO_LONG = "CODE_URL_TOO_LONG"
CODE_URL_INVALID = "CODE_URL_INVALID"


class ErrorDetail(BaseModel):
    """One entry of an error envelope."""
    code: str = ""
    message: str = ""

    model_config = {"extra": "ignore"}


class ErrorEnvelope(BaseModel):
    """`{errors: [{code, message}]}`."""
    errors: List[ErrorDetail] = []
