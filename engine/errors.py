"""Errors raised before any request is sent."""


class ValidationError(ValueError):
    """User input rejected client-side; nothing was sent to the backend."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
