"""Domain error types surfaced to API callers."""


class WhatsCookinError(Exception):
    """Base error with a machine-readable code."""

    code = "ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WhatsCookinError):
    """Raised when caller input has the wrong shape or violates a rule."""

    code = "VALIDATION"


class NotFoundError(WhatsCookinError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"


class StoreError(WhatsCookinError):
    """Raised when the row store is unreachable or returns malformed data."""

    code = "SHEETS_ERROR"


class UnauthorizedError(WhatsCookinError):
    """Raised when a caller is not signed in or not on the allow-list."""

    code = "UNAUTHORIZED"


class AccessDeniedError(UnauthorizedError):
    """Raised when an authenticated identity is not on the allow-list."""


class UpstreamError(WhatsCookinError):
    """Raised when the identity provider cannot be reached."""

    code = "UPSTREAM_ERROR"
