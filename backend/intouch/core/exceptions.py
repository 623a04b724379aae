"""
Application exceptions carrying the HTTP status they map to.

Services raise these so the access-control and response rules can be used
without a transport; ``intouch.main`` converts them to JSON responses.
"""


class InTouchException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationException(InTouchException):
    """Raised when input is malformed before anything is written."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


class NotFoundException(InTouchException):
    """Raised when a pod, prompt, response or user does not exist."""

    def __init__(self, resource: str):
        super().__init__(message=f"{resource} not found", status_code=404)
        self.resource = resource


class ForbiddenException(InTouchException):
    """Raised when an authenticated user lacks rights on a pod."""

    def __init__(self, message: str = "Not a member of this pod"):
        super().__init__(message=message, status_code=403)


class ConflictException(InTouchException):
    """Raised when a write would duplicate an existing row."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=409)
