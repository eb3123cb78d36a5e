"""ToolInvoker: turns a tool call into exactly one proxy GET."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from mdproxy.errors import ConfigurationError, UnknownToolError, ValidationError
from mdproxy.utils.telemetry import ATTR_PROFILE, ATTR_TOOL_KIND, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from mdproxy.config import ProxyCredentials, ServiceProfile
    from mdproxy.fetch import FetchClient
    from mdproxy.tools.models import ToolRoute
    from mdproxy.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

# Same unreserved set as JavaScript's encodeURIComponent.
_QUERY_SAFE = "-_.!~*'()"


class ToolInvoker:
    """Validates a call against the registry and fetches through the proxy.

    Usage::

        invoker = ToolInvoker(profile, credentials, registry, FetchClient())
        markdown = await invoker.invoke("deshell_scrape", {"url": "https://example.com"})
    """

    def __init__(
        self,
        profile: ServiceProfile,
        credentials: ProxyCredentials,
        registry: ToolRegistry,
        fetch_client: FetchClient,
    ) -> None:
        self._profile = profile
        self._credentials = credentials
        self._registry = registry
        self._fetch = fetch_client

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def invoke(self, name: object, arguments: dict[str, Any]) -> str:
        """Run the named tool and return the proxy's response body verbatim."""
        if not self._credentials.configured:
            raise ConfigurationError(self._profile.api_key_env)

        route = self._registry.get(name)
        if route is None:
            raise UnknownToolError(name)

        value = arguments.get(route.arg_name)
        if not value:
            raise ValidationError(route.arg_name)

        url, headers = self.build_request(route, str(value))
        with _tracer.start_as_current_span("mdproxy.tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, route.name)
            span.set_attribute(ATTR_TOOL_KIND, route.kind)
            span.set_attribute(ATTR_PROFILE, self._profile.name_prefix)
            logger.debug("Invoking %s -> %s", route.name, url)
            return await self._fetch.get(url, headers)

    def build_request(self, route: ToolRoute, value: str) -> tuple[str, dict[str, str]]:
        """Compute the target URL and headers for one call."""
        base = self._credentials.base_url
        headers = {self._credentials.header_name: self._credentials.api_key}

        if route.kind == "search":
            headers["Accept"] = "text/markdown"
            return f"{base}/search?q={quote(value, safe=_QUERY_SAFE)}", headers
        if route.kind == "variant":
            return f"{base}/{route.variant}/{value}", headers
        # The target URL is appended as-is so already-encoded URLs pass through.
        return f"{base}/{value}", headers
