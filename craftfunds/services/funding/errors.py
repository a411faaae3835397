"""Error classes for the funding report pipeline."""

from __future__ import annotations

from typing import Optional


class FundingError(RuntimeError):
    """Base exception raised while gathering funding data.

    ``public_message`` is what players get to see; ``str(exc)`` keeps the
    technical detail for the logs.
    """

    public_message = "Failed to retrieve funding information. Please try again later."

    def __init__(
        self,
        message: str,
        code: str = "FUNDING_ERROR",
        public_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if public_message is not None:
            self.public_message = public_message


class ConfigurationError(FundingError):
    """Raised when the database settings are missing, placeholders or unusable."""

    public_message = (
        "Database credentials not configured. Please check your configuration."
    )
    connection_message = (
        "Database connection not configured correctly. Please check your configuration."
    )

    def __init__(
        self,
        message: str,
        code: str = "CONFIGURATION_ERROR",
        public_message: Optional[str] = None,
    ) -> None:
        super().__init__(message, code, public_message)


class DataAccessError(FundingError):
    """Raised when the donation store is unreachable or returns bad rows."""

    public_message = "Database error: funding information is unavailable."

    def __init__(
        self,
        message: str,
        code: str = "DATA_ACCESS_ERROR",
        public_message: Optional[str] = None,
    ) -> None:
        super().__init__(message, code, public_message)
