"""
Results of a Tinify API call.

:class:`ResultMeta` reads the Tinify-specific response headers; missing or
malformed headers read as 0 or an empty string, never as an error.
"""

import os
import warnings
from types import MappingProxyType
from pathlib import Path
from typing import Mapping, Union

from requests.structures import CaseInsensitiveDict

from .errors import TinifyIOError

RESULT_FILE_MODE = 0o644


class ResultMeta:
    """Accessors over the headers of a Tinify API response."""

    def __init__(self, headers: Mapping[str, str]):
        self._headers = CaseInsensitiveDict(headers)

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType(self._headers)

    def _int_header(self, name: str) -> int:
        try:
            return int(self._headers.get(name, 0))
        except (TypeError, ValueError):
            return 0

    @property
    def width(self) -> int:
        return self._int_header("Image-Width")

    @property
    def height(self) -> int:
        return self._int_header("Image-Height")

    @property
    def location(self) -> str:
        return self._headers.get("Location", "")

    @property
    def size(self) -> int:
        """Size in bytes as announced by the server; some servers omit it."""
        return self._int_header("Content-Length")

    @property
    def media_type(self) -> str:
        return self._headers.get("Content-Type", "")

    @property
    def compression_count(self) -> int:
        """
        Number of compressions made with the API key this month.

        Some operations count as more than one compression.
        """
        return self._int_header("Compression-Count")


class Result(ResultMeta):
    """
    Image returned by the Tinify API together with its metadata.

    Args:
        headers: Response headers
        data: Image bytes
    """

    def __init__(self, headers: Mapping[str, str], data: bytes):
        super().__init__(headers)
        self._data = bytes(data)

    @property
    def data(self) -> bytes:
        return self._data

    def to_buffer(self) -> bytes:
        return self.data

    def to_file(self, path: Union[str, Path]):
        """
        Write the image to disk with mode 0o644.

        Raises:
            TinifyIOError: If the file cannot be written
        """
        path = os.path.abspath(path)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, RESULT_FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(self._data)
            os.chmod(path, RESULT_FILE_MODE)
        except OSError as e:
            raise TinifyIOError(f"Could not write result to {path}: {e}") from e

    @property
    def content_type(self) -> str:
        """Deprecated alias of :attr:`media_type`."""
        warnings.warn(
            "Result.content_type is deprecated, use Result.media_type",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.media_type

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"media_type='{self.media_type}', "
            f"bytes={len(self._data)}, "
            f"compression_count={self.compression_count})"
        )
