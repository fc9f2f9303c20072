"""
Error taxonomy for the menu server.

Each user-facing error carries the HTTP status it maps to; the handlers
registered in main.create_app() turn them into JSON responses.
"""


class MenuServerError(Exception):
    """Base class for all application errors."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.public_message
        super().__init__(self.message)


class ConfigurationError(MenuServerError):
    """A required secret is missing. Raised at startup and never served."""

    public_message = "Server is not configured"


class InvalidCredentials(MenuServerError):
    status_code = 401
    public_message = "Invalid credentials"


class NotAuthenticated(MenuServerError):
    """A protected API handler was called without a valid session."""

    status_code = 401
    public_message = "Authentication required"


class MalformedInput(MenuServerError):
    status_code = 400
    public_message = "Invalid request body"


class RateLimitExceeded(MenuServerError):
    status_code = 429
    public_message = "Too many requests. Please try again later."


class StorageTierFailure(MenuServerError):
    """
    A single storage tier failed to read or write.

    Never reaches a client: the content store catches it and falls back
    to the next tier or records it in the write result.
    """

    def __init__(self, tier: str, message: str):
        self.tier = tier
        super().__init__(f"{tier}: {message}")
