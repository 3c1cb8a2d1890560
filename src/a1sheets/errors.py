"""
Exceptions for talking to Google Sheets.
Range notation problems are ValueErrors from sheets.a1, these
are for when authentication or the service itself lets us down.
"""


class GoogleSheetsError(Exception):
    """Base exception for Google Sheets errors."""

    def __init__(self, message: str, details: dict|None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(GoogleSheetsError):
    """Could not get credentials, the secrets file, auth flow or default credentials all failed."""
    pass


class TokenError(GoogleSheetsError):
    """A stored token could not be refreshed for the requested scopes."""

    def __init__(self, message: str, scopes: list[str]|None = None, details: dict|None = None):
        self.scopes = list(scopes or [])
        super().__init__(message, details)


class GoogleSheetsApiError(GoogleSheetsError):
    """The Sheets API answered with something other than success."""

    def __init__(self, status_code: int, body: str = "", details: dict|None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error from Google Sheets API. {status_code} {body}", details)
