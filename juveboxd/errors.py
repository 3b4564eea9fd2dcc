class ReviewError(Exception):
    """Base class for every review submission error"""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ReviewError):
    """Draft rejected before reaching the store"""
    default_message = "Invalid review"


class NotFound(ReviewError):
    """No review with the requested id"""
    default_message = "Review not found"


class StoreUnavailable(ReviewError):
    """Backing medium cannot be read or written"""
    default_message = "Review storage is unavailable"


class TransportError(StoreUnavailable):
    """Remote API answered non-2xx or could not be reached"""

    def __init__(self, message: str | None = None, status: int | None = None):
        self.status = status
        super().__init__(message)


class PersistenceFull(StoreUnavailable):
    """Backing medium has no room left for the write"""
    default_message = "Review storage is full"


class MirrorFailure(ReviewError):
    """Mirrored write failed. Caught inside the mirror and never surfaced."""
    default_message = "Mirror write failed"
