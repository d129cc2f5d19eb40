"""
Tinify Python SDK

Simple client library for compressing, resizing and converting images with
the Tinify API (TinyPNG / TinyJPG).

Usage:
    from tinify_sdk import Client, Configuration, ResizeMethod, ResizeOption

    # Initialize client
    client = Client(Configuration(api_key="your_api_key"))
    # or read TINIFY_API_KEY (and a .env file) from the environment
    client = Client(Configuration.from_environment())

    # Upload and compress an image
    source = client.from_file("photo.png")

    # Queue transforms
    source.resize(ResizeOption(method=ResizeMethod.FIT, width=300, height=200))
    source.convert(["webp", "avif"])

    # Download the result
    count = source.to_file_c("photo.webp")
    print(f"{count} compressions made this month")
"""

__version__ = "0.2.0"

from .config import Configuration
from .errors import (
    AccountError,
    APIError,
    ClientError,
    ConfigurationError,
    DecodingError,
    EmptyResultError,
    ServerError,
    TinifyError,
    TinifyIOError,
    TransportError,
    ValidationError,
)
from .client import Client, JSONPayload, NO_BODY, NoBody, RawBytes
from .commands import (
    CONVERT_MIME_TYPES,
    ConvertOptions,
    ResizeMethod,
    ResizeOption,
    TransformOptions,
)
from .result import Result, ResultMeta
from .source import Source
from .transport import Transport, resolve_proxies

__all__ = [
    "AccountError",
    "APIError",
    "Client",
    "ClientError",
    "Configuration",
    "ConfigurationError",
    "CONVERT_MIME_TYPES",
    "ConvertOptions",
    "DecodingError",
    "EmptyResultError",
    "JSONPayload",
    "NO_BODY",
    "NoBody",
    "RawBytes",
    "ResizeMethod",
    "ResizeOption",
    "Result",
    "ResultMeta",
    "ServerError",
    "Source",
    "TinifyError",
    "TinifyIOError",
    "TransformOptions",
    "Transport",
    "TransportError",
    "ValidationError",
    "resolve_proxies",
]
