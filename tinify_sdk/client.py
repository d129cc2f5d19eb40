"""
Tinify client implementation.

This module contains the Client class and the request body types it sends.
For usage examples, see the package docstring: help(tinify_sdk)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import requests

from . import __version__
from .config import AUTH_USERNAME, Configuration
from .errors import ValidationError, wrap_transport_errors
from .logging import get_logger
from .transport import Transport, get_default_transport, resolve_proxies

logger = get_logger("client")

USER_AGENT = f"tinify-sdk/{__version__} python-requests/{requests.__version__}"


@dataclass(frozen=True)
class NoBody:
    """Request without a body."""

    pass


@dataclass(frozen=True)
class RawBytes:
    """Binary request body, such as an image upload."""

    data: bytes


@dataclass(frozen=True)
class JSONPayload:
    """Request body serialized as JSON."""

    payload: Mapping[str, Any] = field(default_factory=dict)


RequestBody = Union[NoBody, RawBytes, JSONPayload]

NO_BODY = NoBody()


class Client:
    """
    Authenticated client for the Tinify API.

    Holds no per-request state and can be reused for any number of requests.

    Args:
        configuration: API key, shared proxy and endpoint
        proxy: Proxy URL for this client only (default: none)
        transport: Transport to send requests through
            (default: the process-wide shared transport)
    """

    def __init__(
        self,
        configuration: Configuration,
        proxy: Optional[str] = None,
        transport: Optional[Transport] = None,
    ):
        self.configuration = configuration
        self.proxy = proxy
        self.transport = transport or get_default_transport()

    @property
    def api_key(self) -> str:
        return self.configuration.api_key

    def build_url(self, path_or_url: str) -> str:
        """Prefix relative paths with the API endpoint."""
        if path_or_url.lower().startswith("https://"):
            return path_or_url
        return self.configuration.endpoint.rstrip("/") + path_or_url

    def _encode_body(self, body: RequestBody) -> Dict[str, Any]:
        """Translate a request body into ``requests`` keyword arguments."""
        if isinstance(body, NoBody):
            return {}
        if isinstance(body, RawBytes):
            if not body.data:
                return {}
            return {"data": bytes(body.data)}
        if isinstance(body, JSONPayload):
            kwargs = {"headers": {"Content-Type": "application/json"}}
            if body.payload:
                kwargs["data"] = json.dumps(body.payload).encode("utf-8")
            return kwargs
        raise ValidationError(
            "Invalid request body; must be either an image or a JSON object, "
            f"got {type(body).__name__}"
        )

    @wrap_transport_errors
    def request(
        self,
        method: str,
        url: str,
        body: RequestBody = NO_BODY,
        proxy: Optional[str] = None,
    ) -> requests.Response:
        """
        Send an authenticated request to the Tinify API.

        The response is returned as-is; status codes are not interpreted here.

        Args:
            method: HTTP method
            url: Path relative to the API endpoint, or an absolute https URL
            body: NO_BODY, RawBytes or JSONPayload
            proxy: Proxy for this call only

        Returns:
            The raw HTTP response

        Raises:
            ValidationError: If the body is not one of the supported kinds
            TransportError: If the request could not be sent or answered
        """
        kwargs = self._encode_body(body)
        url = self.build_url(url)
        headers = kwargs.pop("headers", {})
        headers["User-Agent"] = USER_AGENT
        proxies = resolve_proxies(
            url,
            global_proxy=self.configuration.proxy,
            client_proxy=self.proxy,
            call_proxy=proxy,
        )

        logger.debug("%s %s", method, url)
        return self.transport.send(
            method,
            url,
            proxies,
            headers=headers,
            auth=(AUTH_USERNAME, self.api_key),
            **kwargs,
        )

    def from_file(self, path: Union[str, Path]) -> "Source":
        """Upload an image file. See :meth:`Source.from_file`."""
        from .source import Source

        return Source.from_file(self, path)

    def from_buffer(self, data: bytes) -> "Source":
        """Upload image bytes. See :meth:`Source.from_buffer`."""
        from .source import Source

        return Source.from_buffer(self, data)

    def from_url(self, url: str) -> "Source":
        """Have the API fetch an image by URL. See :meth:`Source.from_url`."""
        from .source import Source

        return Source.from_url(self, url)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"configuration={self.configuration!r}, proxy={self.proxy!r})"
        )
