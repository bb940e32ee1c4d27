"""
Error Hierarchy

Exception types raised while assembling requests and decoding Azure Storage
responses, plus the status-code check every operation runs on its response.

Author: Ayodele Oladeji
Date: 2025
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    import httpx

    from .transport import RawResponse


class AzureError(Exception):
    """
    Base exception for all azstore errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., 'MissingHeader')
        details: Additional context (header name, status codes, etc.)
    """

    error_code: str = "AzureError"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class MissingParameterError(AzureError):
    """Raised when a builder is finalized before a mandatory parameter was set."""
    error_code = "MissingParameter"

    def __init__(self, builder: str, parameter: str):
        message = f"{builder} cannot be finalized: '{parameter}' was never set"
        super().__init__(message, details={"builder": builder, "parameter": parameter})
        self.builder = builder
        self.parameter = parameter


class MissingHeaderError(AzureError):
    """Raised when a header the response must carry is absent."""
    error_code = "MissingHeader"

    def __init__(self, header: str):
        super().__init__(f"Missing header: {header}", details={"header": header})
        self.header = header


# ========== Parsing Errors ==========

class ParsingError(AzureError):
    """Base class for header or XML leaf values that fail to convert."""
    error_code = "ParsingError"

    def __init__(self, value: Any, target: str, message: Optional[str] = None):
        message = message or f"Cannot parse {value!r} as {target}"
        super().__init__(message, details={"value": value, "target": target})
        self.value = value
        self.target = target


class DateParseError(ParsingError):
    """Raised when a timestamp is not valid RFC 2822."""
    error_code = "DateParseError"

    def __init__(self, value: Any):
        super().__init__(value, "RFC 2822 date")


class BoolParseError(ParsingError):
    """Raised when a boolean is neither 'true' nor 'false'."""
    error_code = "BoolParseError"

    def __init__(self, value: Any):
        super().__init__(value, "bool")


class IntParseError(ParsingError):
    """Raised when an integer value is malformed."""
    error_code = "IntParseError"

    def __init__(self, value: Any):
        super().__init__(value, "int")


class EnumParseError(ParsingError):
    """Raised when a value is not a member of the expected enumeration."""
    error_code = "EnumParseError"

    def __init__(self, value: Any, enum_name: str):
        super().__init__(value, enum_name)


class Utf8ParseError(ParsingError):
    """Raised when a response body is not valid UTF-8."""
    error_code = "Utf8ParseError"

    def __init__(self, reason: str):
        super().__init__(None, "utf-8", message=f"Response body is not valid UTF-8: {reason}")


class UnexpectedXMLError(AzureError):
    """Raised when a response body does not have the expected XML shape."""
    error_code = "UnexpectedXML"

    def __init__(self, message: str):
        super().__init__(message)


class UnexpectedStatusCodeError(AzureError):
    """Raised when the service answers with anything but the documented success code."""
    error_code = "UnexpectedStatusCode"

    def __init__(self, expected: int, actual: int, body: str = ""):
        message = f"Unexpected HTTP result (expected: {expected}, received: {actual})"
        super().__init__(message, details={"expected": expected, "actual": actual, "body": body})
        self.expected = expected
        self.actual = actual
        self.body = body


class TransportError(AzureError):
    """Raised when the request never produced an HTTP response."""
    error_code = "TransportError"

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message, details={"uri": uri} if uri else None)
        self.uri = uri


def check_status_extract_headers_and_body(
    response: "RawResponse",
    expected: int,
) -> Tuple["httpx.Headers", bytes]:
    """
    Validate the status code of a raw response.

    Args:
        response: Response returned by the transport
        expected: The single status code documented for the operation

    Returns:
        Tuple of (headers, body)

    Raises:
        UnexpectedStatusCodeError: If the status differs from ``expected``
    """
    if response.status_code != expected:
        body = response.body.decode("utf-8", errors="replace")
        raise UnexpectedStatusCodeError(expected, response.status_code, body)
    return response.headers, response.body
