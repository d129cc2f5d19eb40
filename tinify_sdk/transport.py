"""
Proxy resolution and the shared HTTP transport.

A request's proxy is picked from the first usable source, in order:

1. the proxy of the client's :class:`Configuration` (shared by all its clients)
2. the proxy configured on the :class:`Client` instance
3. a proxy passed for the single call
4. the ``HTTP_PROXY`` / ``HTTPS_PROXY`` / ``NO_PROXY`` environment variables
5. no proxy

Malformed proxy URLs are logged and skipped, never fatal.
"""

import functools
from http.cookiejar import DefaultCookiePolicy
from typing import Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter

from .config import CONNECT_TIMEOUT, MAX_IDLE_CONNECTIONS, READ_TIMEOUT
from .logging import get_logger

logger = get_logger("transport")

PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")

# distinct hosts kept in the pool cache; uploads and results share one host
POOLED_HOSTS = 4


def parse_proxy(proxy: Optional[str], origin: str) -> Optional[str]:
    """Return ``proxy`` if it is a well-formed proxy URL, otherwise None."""
    if not proxy:
        return None
    try:
        parts = urlsplit(proxy)
        # accessing .port validates it
        parts.port
    except ValueError as error:
        logger.warning("%s proxy must be a valid URL; got %r: %s", origin, proxy, error)
        return None
    if parts.scheme not in PROXY_SCHEMES or not parts.hostname:
        logger.warning(
            "%s proxy must be a valid URL with a scheme in %s and a host; got %r",
            origin,
            ", ".join(PROXY_SCHEMES),
            proxy,
        )
        return None
    return proxy


def resolve_proxies(
    url: str,
    global_proxy: Optional[str] = None,
    client_proxy: Optional[str] = None,
    call_proxy: Optional[str] = None,
) -> Dict[str, str]:
    """
    Select the proxies mapping for a request to ``url``.

    Args:
        url: Target URL of the request
        global_proxy: Proxy from the shared configuration
        client_proxy: Proxy set on the client instance
        call_proxy: Proxy passed for this call only

    Returns:
        A ``requests`` proxies mapping; empty when no proxy applies
    """
    for origin, candidate in (
        ("global", global_proxy),
        ("client", client_proxy),
        ("call", call_proxy),
    ):
        proxy = parse_proxy(candidate, origin)
        if proxy is not None:
            logger.debug("Using %s proxy for %s", origin, url)
            return {"http": proxy, "https": proxy}

    environ_proxies = requests.utils.get_environ_proxies(url)
    if environ_proxies:
        logger.debug("Using environment proxies for %s", url)
        return dict(environ_proxies)
    return {}


class Transport:
    """
    Connection-pooling HTTP transport built once and reused by clients.

    Args:
        max_idle_connections: Upper bound on idle connections across all hosts
        connect_timeout: Seconds allowed to connect, TLS handshake included
        read_timeout: Seconds allowed between bytes of the response
    """

    def __init__(
        self,
        max_idle_connections: int = MAX_IDLE_CONNECTIONS,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ):
        self.timeout = (connect_timeout, read_timeout)
        self.session = requests.Session()
        # proxies come from resolve_proxies only
        self.session.trust_env = False
        # the session is shared by clients with different keys; keep no cookies
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        adapter = HTTPAdapter(
            pool_connections=POOLED_HOSTS,
            pool_maxsize=max(1, max_idle_connections // POOLED_HOSTS),
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def send(
        self,
        method: str,
        url: str,
        proxies: Dict[str, str],
        **kwargs,
    ) -> requests.Response:
        """Send a request through the pooled session."""
        return self.session.request(
            method, url, proxies=proxies, timeout=self.timeout, **kwargs
        )

    def close(self):
        self.session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


@functools.lru_cache(maxsize=None)
def get_default_transport() -> Transport:
    """Return the process-wide transport shared by clients without their own."""
    return Transport()
