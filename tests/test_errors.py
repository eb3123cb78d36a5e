"""Tests for the proxy error hierarchy."""

from mdproxy.errors import (
    ConfigurationError,
    FetchError,
    FetchTimeoutError,
    NetworkError,
    ProxyError,
    TooManyRedirectsError,
    UnknownToolError,
    ValidationError,
)


class TestErrorHierarchy:
    def test_call_errors_are_proxy_errors(self) -> None:
        for cls in (ConfigurationError, ValidationError, UnknownToolError, FetchError):
            assert issubclass(cls, ProxyError)

    def test_fetch_errors(self) -> None:
        for cls in (NetworkError, FetchTimeoutError, TooManyRedirectsError):
            assert issubclass(cls, FetchError)


class TestMessages:
    def test_configuration_error_names_env_var(self) -> None:
        err = ConfigurationError("DESHELL_API_KEY")
        assert str(err) == "DESHELL_API_KEY environment variable is required"
        assert err.env_var == "DESHELL_API_KEY"

    def test_validation_error(self) -> None:
        err = ValidationError("url")
        assert str(err) == "url is required"
        assert err.field == "url"

    def test_unknown_tool(self) -> None:
        err = UnknownToolError("deshell_render")
        assert "deshell_render" in str(err)

    def test_network_error_passes_message_through(self) -> None:
        assert str(NetworkError("[Errno 111] Connection refused")) == "[Errno 111] Connection refused"

    def test_timeout(self) -> None:
        err = FetchTimeoutError(30.0)
        assert str(err) == "Request timed out"
        assert err.timeout == 30.0

    def test_too_many_redirects(self) -> None:
        err = TooManyRedirectsError("http://x.test/a", 5)
        assert "5" in str(err)
        assert err.url == "http://x.test/a"
