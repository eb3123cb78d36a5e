"""Tests for ToolInvoker URL building, validation, and proxying."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from mdproxy.app import build_invoker
from mdproxy.config import DESHELL, DISTIL, ServiceProfile
from mdproxy.errors import ConfigurationError, UnknownToolError, ValidationError
from mdproxy.tools.invoker import ToolInvoker
from mdproxy.utils.telemetry import ATTR_PROFILE, ATTR_TOOL_KIND, ATTR_TOOL_NAME
from tests.conftest import RecordingProxy, make_credentials


class TestInvokeScrape:
    async def test_scrape_proxies_url(self, invoker: ToolInvoker, proxy: RecordingProxy) -> None:
        text = await invoker.invoke("deshell_scrape", {"url": "https://example.com"})

        assert "Mocked scrape" in text
        assert str(proxy.last.url) == "http://proxy.test/https://example.com"
        assert proxy.last.headers["x-deshell-key"] == "dk_test"
        assert proxy.last.headers["accept"] != "text/markdown"

    async def test_scrape_does_not_reencode_url(
        self, invoker: ToolInvoker, proxy: RecordingProxy
    ) -> None:
        await invoker.invoke("deshell_scrape", {"url": "https://example.com/a%20b?x=%2F"})
        assert proxy.last.url.raw_path == b"/https://example.com/a%20b?x=%2F"

    async def test_returns_body_verbatim(self) -> None:
        import httpx

        body = "  # Title\n\n<raw> & stuff\n"
        proxy = RecordingProxy(lambda _req: httpx.Response(200, text=body))
        invoker = build_invoker(DESHELL, make_credentials(), fetch_client=proxy.fetch_client())
        assert await invoker.invoke("deshell_scrape", {"url": "https://e.com"}) == body


class TestInvokeSearch:
    async def test_search_encodes_query_and_sets_accept(
        self, invoker: ToolInvoker, proxy: RecordingProxy
    ) -> None:
        await invoker.invoke("deshell_search", {"query": "deshell ai/proxy & more"})

        assert proxy.last.url.path == "/search"
        assert proxy.last.url.raw_path == b"/search?q=deshell%20ai%2Fproxy%20%26%20more"
        assert proxy.last.headers["accept"] == "text/markdown"
        assert proxy.last.headers["x-deshell-key"] == "dk_test"

    async def test_search_keeps_unreserved_marks(self, invoker: ToolInvoker) -> None:
        url, _ = invoker.build_request(invoker.registry.get("deshell_search"), "it's (ok)!")  # type: ignore[arg-type]
        assert url.endswith("/search?q=it's%20(ok)!")


class TestInvokeVariants:
    @pytest.mark.parametrize("variant", ["screenshot", "render", "raw", "nocache"])
    async def test_variant_path(
        self, distil_invoker: ToolInvoker, proxy: RecordingProxy, variant: str
    ) -> None:
        await distil_invoker.invoke(f"distil_{variant}", {"url": "https://example.com"})

        assert str(proxy.last.url) == f"http://proxy.test/{variant}/https://example.com"
        assert proxy.last.headers["x-distil-key"] == "dk_test"

    async def test_variant_unavailable_on_deshell(self, invoker: ToolInvoker) -> None:
        with pytest.raises(UnknownToolError, match="deshell_render"):
            await invoker.invoke("deshell_render", {"url": "https://example.com"})


class TestInvokeErrors:
    async def test_missing_credentials_checked_first(self, proxy: RecordingProxy) -> None:
        invoker = build_invoker(
            DESHELL, make_credentials(api_key=""), fetch_client=proxy.fetch_client()
        )
        with pytest.raises(ConfigurationError, match="DESHELL_API_KEY"):
            await invoker.invoke("no_such_tool", {})
        assert proxy.requests == []

    async def test_missing_argument(self, invoker: ToolInvoker, proxy: RecordingProxy) -> None:
        with pytest.raises(ValidationError, match="url is required"):
            await invoker.invoke("deshell_scrape", {})
        assert proxy.requests == []

    async def test_empty_argument(self, invoker: ToolInvoker) -> None:
        with pytest.raises(ValidationError, match="query is required"):
            await invoker.invoke("deshell_search", {"query": ""})

    async def test_unknown_tool(self, invoker: ToolInvoker) -> None:
        with pytest.raises(UnknownToolError, match="Unknown tool: nope"):
            await invoker.invoke("nope", {"url": "x"})


class TestEveryListedToolIsInvokable:
    @pytest.mark.parametrize("profile", [DESHELL, DISTIL], ids=["deshell", "distil"])
    async def test_all_listed_tools(self, profile: ServiceProfile, proxy: RecordingProxy) -> None:
        invoker = build_invoker(
            profile, make_credentials(profile), fetch_client=proxy.fetch_client()
        )
        for descriptor in invoker.registry.descriptors():
            arguments = {field: "https://example.com" for field in descriptor.required}
            text = await invoker.invoke(descriptor.name, arguments)
            assert text
        assert len(proxy.requests) == len(invoker.registry)


class TestInvokeSpan:
    async def test_span_carries_tool_and_profile(self, distil_invoker: ToolInvoker) -> None:
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        with patch("mdproxy.tools.invoker._tracer", tracer):
            await distil_invoker.invoke("distil_render", {"url": "https://example.com"})

        tracer.start_as_current_span.assert_called_once_with("mdproxy.tool.invoke")
        span.set_attribute.assert_any_call(ATTR_TOOL_NAME, "distil_render")
        span.set_attribute.assert_any_call(ATTR_TOOL_KIND, "variant")
        span.set_attribute.assert_any_call(ATTR_PROFILE, "distil")
