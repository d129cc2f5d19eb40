"""Exceptions raised by the Tinify SDK."""

import functools
from typing import Any, Callable, Optional

import requests


class TinifyError(Exception):
    """
    Base exception for Tinify SDK errors.

    Attributes:
        compression_count: Usage counter observed before the error happened,
            when a fetch had already succeeded; otherwise None
    """

    def __init__(self, message: str = "", compression_count: Optional[int] = None):
        super().__init__(message)
        self.compression_count = compression_count


class ConfigurationError(TinifyError):
    """Missing or invalid API key."""

    pass


class ValidationError(TinifyError):
    """Invalid arguments, rejected before anything is sent."""

    pass


class TransportError(TinifyError):
    """Connection, DNS, TLS, proxy or timeout failure."""

    pass


class TinifyIOError(TinifyError):
    """Reading or writing a local file failed."""

    pass


class EmptyResultError(TinifyError):
    """The API returned a successful response with no image data."""

    pass


class APIError(TinifyError):
    """
    Error reported by the Tinify API.

    Attributes:
        status_code: HTTP status code of the response
        status: HTTP status line, e.g. ``"429 Too Many Requests"``
        error: Error identifier sent by the API (e.g. ``"TooManyRequests"``)
        message: Human-readable message sent by the API
    """

    def __init__(
        self,
        status_code: int,
        status: str,
        error: str = "",
        message: str = "",
    ):
        super().__init__(
            f"Tinify API call failed, HTTP status was {status!r}. "
            f"Error: {error} Message: {message}"
        )
        self.status_code = status_code
        self.status = status
        self.error = error
        self.message = message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"status_code={self.status_code}, "
            f"error='{self.error}', "
            f"message='{self.message}')"
        )


class AccountError(APIError):
    """Authentication failed or the monthly compression limit was reached."""

    pass


class ClientError(APIError):
    """The request was rejected by the API (4xx)."""

    pass


class ServerError(APIError):
    """The API failed to process the request (5xx)."""

    pass


class DecodingError(APIError):
    """The API answered with an error body that is not valid JSON."""

    pass


def api_error_class(status_code: int) -> type:
    """Pick the APIError subclass matching an HTTP status code."""
    if status_code in (401, 429):
        return AccountError
    if 400 <= status_code < 500:
        return ClientError
    if status_code >= 500:
        return ServerError
    return APIError


def scrub_api_key(value: str, api_key: Optional[str]) -> str:
    """Remove the API key from a string before it reaches an error message."""
    if not api_key:
        return value
    return value.replace(api_key, "***")


def wrap_transport_errors(function: Callable) -> Callable:
    """
    Convert ``requests`` transport failures into :class:`TransportError`.

    The wrapped callable must be a method of an object exposing ``api_key``,
    which is scrubbed from the resulting message.
    """

    @functools.wraps(function)
    def decorate(self, *args, **kwargs) -> Any:
        try:
            return function(self, *args, **kwargs)
        except requests.exceptions.ProxyError as error:
            raise TransportError(
                f"Error with proxy connection: {scrub_api_key(str(error), self.api_key)}"
            ) from error
        except requests.exceptions.Timeout as error:
            raise TransportError(
                f"Request timed out: {scrub_api_key(str(error), self.api_key)}"
            ) from error
        except requests.exceptions.ConnectionError as error:
            raise TransportError(
                f"Error with server connection: {scrub_api_key(str(error), self.api_key)}"
            ) from error
        except requests.exceptions.RequestException as error:
            raise TransportError(
                f"Request failed: {scrub_api_key(str(error), self.api_key)}"
            ) from error

    return decorate
