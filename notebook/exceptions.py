"""Application exception hierarchy.

Every failure a caller can observe maps to one of four outcomes:

    NotebookError (base)
    ├── Unauthenticated          → 401 (no or invalid session)
    ├── NotFoundOrUnauthorized   → 404 (missing, or caller lacks ownership)
    ├── ValidationFailed         → 400 (input violates the schema)
    └── InternalFailure          → 500 (store or external service failed)

Handlers registered in ``notebook.main`` turn these into JSON envelopes of the
form ``{"error": ..., "message": ..., "details": ...}``. ``NotFoundOrUnauthorized``
deliberately has a single message per resource so that a list the caller may
not see is indistinguishable from one that does not exist.
"""

from typing import Any


class NotebookError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str = "An error occurred", context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class Unauthenticated(NotebookError):
    """Raised when the caller has no valid session."""

    status_code = 401
    error_code = "unauthenticated"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message)


class NotFoundOrUnauthorized(NotebookError):
    """Raised when a resource is absent or the caller has no ownership relation to it."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str = "resource"):
        super().__init__(
            message=f"{resource.capitalize()} not found", context={"resource": resource}
        )


class ValidationFailed(NotebookError):
    """Raised when client input fails validation."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InternalFailure(NotebookError):
    """Raised when a collaborator (store, storage, places API) fails unexpectedly.

    The context is logged server-side and never returned to the caller.
    """

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str = "Internal Error", context: dict[str, Any] | None = None):
        super().__init__(message=message, context=context)
