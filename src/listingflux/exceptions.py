"""Custom exceptions for listing acquisition."""
from typing import Optional


class ListingFluxError(Exception):
    """Base exception for all ListingFlux errors."""

    pass


class InvalidIdentifierError(ListingFluxError):
    """Identifier is not safe to embed in the listing URL.

    Raised before any session is opened; maps to a 400 response.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invalid product identifier: {identifier!r}")
        self.identifier = identifier


class AcquisitionError(ListingFluxError):
    """Listing acquisition failed.

    Wraps any launch, navigation, timeout or extraction error raised while the
    session was open. The original exception is kept on ``cause`` for logs.
    Not retried by the acquirer; retry policy belongs to the caller.
    """

    def __init__(
        self,
        identifier: str,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize acquisition error.

        Args:
            identifier: Product identifier being acquired
            cause: Underlying exception, if any
            message: Human-readable override
        """
        if message is None:
            detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
            message = f"Acquisition failed for {identifier}: {detail}"
        super().__init__(message)
        self.identifier = identifier
        self.cause = cause


class ListingNotFoundError(ListingFluxError):
    """Page loaded but no product title was found.

    Either the identifier is invalid or the source blocked the request; the
    two cases are not told apart. Never raised for an attempt that also
    failed with AcquisitionError.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invalid ASIN or blocked: {identifier}")
        self.identifier = identifier
