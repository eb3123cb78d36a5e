"""ToolRegistry: the static, ordered catalog of tools for a profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdproxy.config import VARIANT_ORDER
from mdproxy.tools.models import ToolDescriptor, ToolParam, ToolRoute

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mdproxy.config import ServiceProfile

_URL_PARAM = ToolParam(name="url", description="The URL to fetch and convert to Markdown")
_QUERY_PARAM = ToolParam(name="query", description="The search query")

_SCRAPE_DESCRIPTION = (
    "Fetch a URL and return its content as clean Markdown. Handles "
    "JavaScript-rendered pages, PDFs, and automatic content extraction."
)
_SEARCH_DESCRIPTION = (
    "Search the web and return results as Markdown. Includes titles, URLs, "
    "and snippet text for the top results."
)

_VARIANT_DESCRIPTIONS: dict[str, str] = {
    "screenshot": "Capture a screenshot of a web page and return it as an image link in Markdown.",
    "render": "Fetch a URL with full JavaScript rendering in a headless browser, then convert to Markdown.",
    "raw": "Fetch a URL and return the raw response body without Markdown conversion.",
    "nocache": "Fetch a URL bypassing the proxy cache and return fresh content as Markdown.",
}


def build_routes(profile: ServiceProfile) -> list[ToolRoute]:
    """Return the tool routes for *profile* in listing order."""
    routes = [
        ToolRoute(
            descriptor=ToolDescriptor.from_params(
                profile.tool_name("scrape"), _SCRAPE_DESCRIPTION, [_URL_PARAM]
            ),
            kind="scrape",
            arg_name="url",
        ),
        ToolRoute(
            descriptor=ToolDescriptor.from_params(
                profile.tool_name("search"), _SEARCH_DESCRIPTION, [_QUERY_PARAM]
            ),
            kind="search",
            arg_name="query",
        ),
    ]
    for variant in VARIANT_ORDER:
        if variant not in profile.enabled_variants:
            continue
        routes.append(
            ToolRoute(
                descriptor=ToolDescriptor.from_params(
                    profile.tool_name(variant), _VARIANT_DESCRIPTIONS[variant], [_URL_PARAM]
                ),
                kind="variant",
                arg_name="url",
                variant=variant,
            )
        )
    return routes


class ToolRegistry:
    """Name-to-route map that preserves listing order.

    Both ``tools/list`` and the invoker read from the same table, so every
    listed tool is invokable and nothing else is.
    """

    def __init__(self, routes: list[ToolRoute]) -> None:
        self._routes: dict[str, ToolRoute] = {}
        for route in routes:
            if route.name in self._routes:
                msg = f"Duplicate tool name: {route.name}"
                raise ValueError(msg)
            self._routes[route.name] = route

    @classmethod
    def for_profile(cls, profile: ServiceProfile) -> ToolRegistry:
        return cls(build_routes(profile))

    def descriptors(self) -> list[ToolDescriptor]:
        return [route.descriptor for route in self._routes.values()]

    def names(self) -> list[str]:
        return list(self._routes)

    def get(self, name: object) -> ToolRoute | None:
        if not isinstance(name, str):
            return None
        return self._routes.get(name)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[ToolRoute]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)
