"""Typed errors raised by the model layer.

Each error carries an explicit ``kind`` and HTTP status so the API boundary can
map it to a response without inspecting the message text.
"""


class ShelfError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShelfError):
    """Missing or invalid fields, or a per-user cap exceeded."""

    kind = "validation"
    status_code = 400


class NotFoundError(ShelfError):
    kind = "not_found"
    status_code = 404


class ConflictError(ShelfError):
    """A uniqueness rule would be broken (e.g. duplicate email)."""

    kind = "conflict"
    status_code = 409
