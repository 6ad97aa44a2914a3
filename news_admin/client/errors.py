"""
Client - Errors

Exceptions raised by the backend client.
"""

from typing import List, Optional

from news_admin.schemas.errors import ErrorDetail


class BackendError(Exception):
    """Non-2xx response from the news backend."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        errors: Optional[List[ErrorDetail]] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.errors = errors or []
        super().__init__(f"{status_code} {reason}".strip())

    @property
    def code(self) -> Optional[str]:
        """Code of the first structured error, if the body carried one."""
        return self.errors[0].code if self.errors else None

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class BackendUnavailable(BackendError):
    """The backend could not be reached at all."""

    def __init__(self, reason: str = ""):
        super().__init__(503, reason or "Network connection failed")


class MalformedResponse(BackendError):
    """A response body that cannot be decoded or does not match the expected envelope."""
