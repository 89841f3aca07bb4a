"""
Exception hierarchy for the variant service.
"""


class VariantServiceError(Exception):
    """Service base exception."""


class AuthenticationError(VariantServiceError):
    """
    Missing, unknown or inactive API key.

    The message is returned to the caller as-is, so it must never say which
    of those cases applied beyond "missing".
    """

    def __init__(self, message: str = "Invalid API key or inactive website"):
        super().__init__(message)
        self.message = message


class ElementResolutionError(VariantServiceError):
    """Unexpected failure while resolving a single element."""

    def __init__(self, element_id: str, cause: BaseException):
        super().__init__(f"Failed to resolve element {element_id}: {cause!r}")
        self.element_id = element_id
        self.cause = cause
