"""
Error taxonomy for the bindery pipeline.

Page-level errors (capability, refusal, permanent page) never escape the
page boundary in the transcription pipeline. StructuralInputError is raised
while loading book data and aborts the run.
"""

from typing import Optional


class BinderyError(Exception):
    pass


class CapabilityError(BinderyError):
    """Non-retryable failure from the text-recognition capability."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class TransientCapabilityError(CapabilityError):
    """Rate-limit, overload, connection reset or timeout. Retried with backoff."""

    RATE_LIMITED = "rate_limited"
    OVERLOADED = "overloaded"
    CONNECTION_RESET = "connection_reset"
    TIMEOUT = "timeout"

    def __init__(self, message: str, reason: str, status: Optional[int] = None):
        super().__init__(message, status=status)
        self.reason = reason


class MalformedResponseError(CapabilityError):
    pass


class RefusalError(BinderyError):
    """The recognition capability kept declining to transcribe a page."""

    def __init__(self, message: str, attempts: int, last_text: str = ""):
        super().__init__(message)
        self.attempts = attempts
        self.last_text = last_text


class PermanentPageError(BinderyError):
    def __init__(self, index: int, page: int, screenshot: str, cause: Exception):
        super().__init__(
            f"error processing image {index} ({screenshot}): "
            f"{type(cause).__name__}: {cause}"
        )
        self.index = index
        self.page = page
        self.screenshot = screenshot
        self.cause = cause


class StructuralInputError(BinderyError):
    """Missing or empty book metadata/content. Fatal for the whole run."""
