"""
Sources: images uploaded to the Tinify API plus their pending commands.

Uploading an image (from a file, a buffer or a URL) compresses it and yields
a Source pointing at the compressed image. Resize, convert and transform
commands can then be queued; every export fetches the image again from the
API with the commands applied. Nothing is cached between exports.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import requests

from .client import Client, JSONPayload, RawBytes
from .commands import CommandSet, ConvertOptions, ResizeOption, TransformOptions
from .config import SHRINK_PATH
from .errors import (
    APIError,
    DecodingError,
    EmptyResultError,
    TinifyError,
    TinifyIOError,
    ValidationError,
    api_error_class,
)
from .logging import get_logger
from .result import Result, ResultMeta

logger = get_logger("source")


def _status_line(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".strip()


def _api_error(response: requests.Response) -> APIError:
    """Build the exception describing an error response."""
    status = _status_line(response)
    try:
        body = response.json()
    except ValueError:
        return DecodingError(response.status_code, status, message=status)
    if not isinstance(body, dict):
        return DecodingError(response.status_code, status, message=status)

    error_class = api_error_class(response.status_code)
    return error_class(
        response.status_code,
        status,
        error=str(body.get("error", "")),
        message=str(body.get("message", "")),
    )


class Source:
    """
    Handle to an image held by the Tinify API.

    Create sources with :meth:`from_file`, :meth:`from_buffer` or
    :meth:`from_url` rather than directly.

    A Source is not safe for concurrent use; serialize access to it if it is
    shared between threads.

    Args:
        client: Client used for every request of this source
        url: Location of the compressed image
        compression_count: Usage counter reported by the upload
    """

    def __init__(self, client: Client, url: str, compression_count: int = 0):
        self.client = client
        self._url = url
        self._commands = CommandSet()
        self.compression_count = compression_count

    @property
    def url(self) -> str:
        return self._url

    @property
    def commands(self) -> Mapping[str, Dict[str, Any]]:
        """Read-only view of the queued commands as sent to the API."""
        return MappingProxyType(self._commands.to_payload())

    @classmethod
    def from_file(cls, client: Client, path: Union[str, Path]) -> "Source":
        """
        Upload an image file for compression.

        Args:
            client: Client to upload with
            path: Path to the image file

        Returns:
            Source pointing at the compressed image

        Raises:
            TinifyIOError: If the file cannot be read
            APIError: If the API rejects the upload
            TransportError: If the API cannot be reached

        Example:
            >>> source = Source.from_file(client, "photo.png")
            >>> source.to_file("optimized.png")
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise TinifyIOError(f"Could not read {path}: {e}") from e
        return cls.from_buffer(client, data)

    @classmethod
    def from_buffer(cls, client: Client, data: bytes) -> "Source":
        """
        Upload image bytes for compression.

        Args:
            client: Client to upload with
            data: Raw image data (PNG, JPEG, WebP or AVIF)

        Returns:
            Source pointing at the compressed image
        """
        response = client.request("POST", SHRINK_PATH, RawBytes(data))
        return cls._from_response(client, response)

    @classmethod
    def from_url(cls, client: Client, url: str) -> "Source":
        """
        Have the API download and compress the image at ``url``.

        Args:
            client: Client to upload with
            url: Publicly reachable image URL

        Returns:
            Source pointing at the compressed image

        Raises:
            ValidationError: If the URL is empty
        """
        if not url:
            raise ValidationError("URL is required")
        body = JSONPayload({"source": {"url": url}})
        response = client.request("POST", SHRINK_PATH, body)
        return cls._from_response(client, response)

    @classmethod
    def _from_response(cls, client: Client, response: requests.Response) -> "Source":
        """Create a source from the Location header of an upload response."""
        if response.status_code >= 400:
            raise _api_error(response)
        location = response.headers.get("Location")
        if not location:
            raise APIError(
                response.status_code,
                _status_line(response),
                error="MissingLocation",
                message="Upload response did not include a Location header",
            )

        meta = ResultMeta(response.headers)
        logger.debug(
            "Uploaded to %s (compression count %d)", location, meta.compression_count
        )
        return cls(client, location, compression_count=meta.compression_count)

    def resize(self, option: ResizeOption) -> "Source":
        """
        Queue a resize, replacing any previous one.

        Resizing counts as one additional compression.

        Args:
            option: Resize method and dimensions

        Returns:
            This source, for chaining

        Raises:
            ValidationError: If the option is missing or its dimensions do
                not suit the method
        """
        if option is None:
            raise ValidationError("Option for resize is required")
        option.validate()
        self._commands.set(option)
        return self

    def convert(self, type_names: Iterable[str]) -> "Source":
        """
        Queue a format conversion, replacing any previous one.

        With several types the API picks the smallest result.

        Args:
            type_names: Short format names: png, jpeg, webp, avif

        Returns:
            This source, for chaining

        Raises:
            ValidationError: If no known type name was given
        """
        if isinstance(type_names, str):
            type_names = [type_names]
        self._commands.set(ConvertOptions.from_names(type_names or []))
        return self

    def transform(self, option: TransformOptions) -> "Source":
        """
        Queue a background transform, replacing any previous one.

        Args:
            option: Background colour for transparent areas

        Returns:
            This source, for chaining
        """
        if option is None:
            raise ValidationError("Option for transform is required")
        self._commands.set(option)
        return self

    def to_result(self, proxy: Optional[str] = None) -> Result:
        """
        Fetch the image with all queued commands applied.

        Args:
            proxy: Proxy for this call only

        Returns:
            The fetched image and its metadata

        Raises:
            ValidationError: If the source has no URL
            APIError: If the API reports an error
            TransportError: If the API cannot be reached
        """
        if not self._url:
            raise ValidationError("Source URL is empty")

        # the API expects the commands as a JSON body on GET
        response = self.client.request(
            "GET", self._url, JSONPayload(self._commands.to_payload()), proxy=proxy
        )

        media_type = response.headers.get("Content-Type", "").lower()
        if response.status_code >= 400 or media_type.startswith("application/json"):
            error = _api_error(response)
            logger.debug("API error for %s: %r", self._url, error)
            raise error

        result = Result(response.headers, response.content)
        if "Compression-Count" in response.headers:
            self.compression_count = result.compression_count
        return result

    def to_file_c(self, path: Union[str, Path]) -> int:
        """
        Write the processed image to ``path``.

        Args:
            path: Destination file; relative paths resolve against the cwd

        Returns:
            The compression count reported with the image

        Raises:
            TinifyIOError: If the file cannot be written; its
                ``compression_count`` is set since the fetch succeeded
        """
        result = self.to_result()
        try:
            result.to_file(path)
        except TinifyError as e:
            e.compression_count = result.compression_count
            raise
        return result.compression_count

    def to_buffer_c(self) -> Tuple[bytes, int]:
        """
        Return the processed image bytes and the compression count.

        Raises:
            EmptyResultError: If the API returned no data; its
                ``compression_count`` is set since the fetch succeeded
        """
        result = self.to_result()
        count = result.compression_count
        data = result.data
        if not data:
            raise EmptyResultError("Result returned zero bytes", compression_count=count)
        return data, count

    def to_file(self, path: Union[str, Path]):
        """Write the processed image to ``path``, discarding the compression count."""
        self.to_file_c(path)

    def to_buffer(self) -> bytes:
        """Return the processed image bytes, discarding the compression count."""
        data, _ = self.to_buffer_c()
        return data

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"url='{self._url}', "
            f"commands={self._commands!r}, "
            f"compression_count={self.compression_count})"
        )
