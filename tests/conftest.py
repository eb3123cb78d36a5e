"""Shared fixtures: a recording mock proxy and a wired-up dispatcher."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from mdproxy.app import build_dispatcher, build_invoker
from mdproxy.config import DESHELL, DISTIL, ProxyCredentials, ServiceProfile
from mdproxy.fetch import FetchClient
from mdproxy.rpc.dispatcher import RpcDispatcher
from mdproxy.tools.invoker import ToolInvoker

PROXY_BASE = "http://proxy.test"
API_KEY = "dk_test"


class RecordingProxy:
    """``httpx.MockTransport`` handler that records every request it sees.

    By default answers ``200`` with ``"# Mocked scrape for <path>"``; pass a
    custom *responder* to shape the reply.
    """

    def __init__(
        self, responder: Callable[[httpx.Request], httpx.Response] | None = None
    ) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder or self._default

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @staticmethod
    def _default(request: httpx.Request) -> httpx.Response:
        target = request.url.raw_path.decode()
        return httpx.Response(200, text=f"# Mocked scrape for {target}")

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def fetch_client(self, **kwargs: object) -> FetchClient:
        return FetchClient(transport=httpx.MockTransport(self), **kwargs)  # type: ignore[arg-type]


def make_credentials(
    profile: ServiceProfile = DESHELL, api_key: str = API_KEY, base_url: str = PROXY_BASE
) -> ProxyCredentials:
    return ProxyCredentials(header_name=profile.header_name, api_key=api_key, base_url=base_url)


@pytest.fixture
def proxy() -> RecordingProxy:
    return RecordingProxy()


@pytest.fixture
def invoker(proxy: RecordingProxy) -> ToolInvoker:
    return build_invoker(DESHELL, make_credentials(), fetch_client=proxy.fetch_client())


@pytest.fixture
def distil_invoker(proxy: RecordingProxy) -> ToolInvoker:
    return build_invoker(DISTIL, make_credentials(DISTIL), fetch_client=proxy.fetch_client())


@pytest.fixture
def dispatcher(proxy: RecordingProxy) -> RpcDispatcher:
    return build_dispatcher(DESHELL, make_credentials(), fetch_client=proxy.fetch_client())


@pytest.fixture
def unconfigured_dispatcher(proxy: RecordingProxy) -> RpcDispatcher:
    return build_dispatcher(
        DESHELL, make_credentials(api_key=""), fetch_client=proxy.fetch_client()
    )
