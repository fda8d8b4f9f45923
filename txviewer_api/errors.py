"""
Error taxonomy for the API.

Each error carries the HTTP status it is rendered with; the handler in
`main` turns them into JSON bodies of the form {"error": ..., "details": ...}.
"""

from typing import Any, Optional


class TxViewerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidAddress(TxViewerError):
    """Client-supplied account identifier is not a valid address."""

    status_code = 400

    def __init__(self, message: str = "Invalid address"):
        super().__init__(message)


class MissingCredential(TxViewerError):
    """Etherscan API key is not configured."""

    status_code = 500

    def __init__(self, message: str = "Missing ETHERSCAN_API_KEY"):
        super().__init__(message)


class UpstreamError(TxViewerError):
    """Etherscan answered with a non-success status in its payload."""

    status_code = 502

    def __init__(self, payload: Any, message: str = "Etherscan error"):
        super().__init__(message, details=payload)


class TransportError(TxViewerError):
    """Etherscan could not be reached, or the request failed unexpectedly."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or "Tx fetch error")
