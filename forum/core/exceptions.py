"""
Error kinds raised by the forum post services.

Each kind carries the HTTP status the API layer answers with; the handler in
main.py renders them as {"error": message, "type": error_type}.
"""


class ForumException(Exception):
    error_type = "forum_error"

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ForumException):
    """A required field is missing or empty."""

    error_type = "validation_error"

    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFound(ForumException):
    error_type = "not_found"

    def __init__(self, message: str = "Post not found"):
        super().__init__(message, 404)


class Unauthorized(ForumException):
    """The actor is not allowed to perform the operation on this post."""

    error_type = "unauthorized"

    def __init__(self, message: str):
        super().__init__(message, 403)


class TerminalStateConflict(ForumException):
    """The post is removed, or the requested transition does not exist."""

    error_type = "terminal_state_conflict"

    def __init__(self, message: str):
        super().__init__(message, 409)


class ConcurrentConflict(ForumException):
    """A conditional update matched no row because the post changed meanwhile."""

    error_type = "concurrent_conflict"

    def __init__(self, message: str = "Post was modified concurrently, retry"):
        super().__init__(message, 409)
