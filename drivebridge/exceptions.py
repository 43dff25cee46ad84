class DriveBridgeError(Exception):
    """Base class for errors surfaced to the bridge caller."""

    code: str | None = None


class AuthenticationError(DriveBridgeError):
    """Raised when the bearer token is missing or was never set."""


class MissingTokenError(AuthenticationError):
    code = "MISSING_TOKEN"

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message)


class NotInitializedError(AuthenticationError):
    code = "NOT_INITIALIZED"

    def __init__(self, message: str = "Plugin not initialized. Call initialize() with an access token first."):
        super().__init__(message)


class MissingParameterError(DriveBridgeError):
    """Raised when a required call parameter is absent."""


class IntegrationError(DriveBridgeError):
    """Raised when the Drive API answers with a non-2xx status.

    The message is the raw response body, unparsed.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(DriveBridgeError):
    """Raised when the HTTP exchange itself fails (DNS, connection, IO)."""
