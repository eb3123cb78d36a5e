"""Shared error types for tool invocation and HTTP fetching.

Every error raised while serving a ``tools/call`` derives from
:class:`ProxyError`; the dispatcher turns them into JSON-RPC errors.
"""

from __future__ import annotations


class ProxyError(Exception):
    """Base error for all proxy-layer failures."""


class ConfigurationError(ProxyError):
    """No API key is configured for the active service profile."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable is required")


class ValidationError(ProxyError):
    """A required tool argument is missing or empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class UnknownToolError(ProxyError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class FetchError(ProxyError):
    """Base error for outbound HTTP failures."""


class NetworkError(FetchError):
    """Transport-level failure; the message is the underlying error's text."""


class FetchTimeoutError(FetchError):
    """The request did not complete within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__("Request timed out")


class TooManyRedirectsError(FetchError):
    """Redirect chain exceeded the configured maximum."""

    def __init__(self, url: str, max_redirects: int) -> None:
        self.url = url
        self.max_redirects = max_redirects
        super().__init__(f"Too many redirects (max {max_redirects}) fetching {url}")
