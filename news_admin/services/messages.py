"""
Services - User Messages

Maps backend failures to the messages shown to operators.
"""

from typing import Dict

from pydantic import ValidationError

from news_admin.client.errors import BackendError
from news_admin.schemas.errors import (
    CODE_PUBLISHER_NOT_FOUND,
    CODE_URL_INVALID,
    CODE_URL_TOO_LONG,
)

ADD_NEWS = "add_news"
DELETE_NEWS = "delete_news"
ADD_PUBLISHER = "add_publisher"


CONFLICT_MESSAGES: Dict[str, str] = {
    ADD_NEWS: "This news article already exists.",
    DELETE_NEWS: "Cannot delete this news item due to a conflict.",
    ADD_PUBLISHER: "A publisher with this name or domain already exists.",
}

CODE_MESSAGES: Dict[str, Dict[str, str]] = {
    ADD_NEWS: {
        CODE_PUBLISHER_NOT_FOUND: "The publisher domain is not existed. Try to add publisher first.",
        CODE_URL_TOO_LONG: "The URL is too long. Please use a shorter URL.",
        CODE_URL_INVALID: "The URL format is invalid. Please enter a valid URL.",
    },
    ADD_PUBLISHER: {
        CODE_URL_INVALID: "The domain format is invalid. Please enter a valid domain.",
        CODE_PUBLISHER_NOT_FOUND: "The publisher was not found.",
        CODE_URL_TOO_LONG: "The domain is too long. Please use a shorter domain.",
    },
}


def error_message(action: str, error: BackendError) -> str:
    """User-facing text for a failed ``action``."""
    if error.is_conflict and action in CONFLICT_MESSAGES:
        return CONFLICT_MESSAGES[action]

    if action == DELETE_NEWS and error.errors:
        return f"Failed to delete news item: {error.errors[0].message or 'Unknown error'}"

    known = CODE_MESSAGES.get(action, {})
    if error.code in known:
        return known[error.code]

    return f"Request failed ({error.status_code}): {error.reason}"


def validation_message(error: ValidationError) -> str:
    """First field error of a rejected submission, without pydantic's prefix."""
    first = error.errors()[0]
    message = first.get("msg", "Invalid input")
    return message.removeprefix("Value error, ")


def error_response(action: str, error: BackendError) -> dict:
    return {"error": error_message(action, error), "status_code": error.status_code}
