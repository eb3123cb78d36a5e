"""Service profiles and credential resolution.

A :class:`ServiceProfile` captures everything that differs between the
proxy front-ends (tool-name prefix, API key header, default origin, and
which optional variant tools exist). :func:`resolve_credentials` runs once
at startup and produces the immutable :class:`ProxyCredentials` handed to
the tool invoker.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

Variant = Literal["screenshot", "render", "raw", "nocache"]

VARIANT_ORDER: tuple[Variant, ...] = ("screenshot", "render", "raw", "nocache")

PROFILE_ENV = "MDPROXY_PROFILE"
DEFAULT_PROFILE = "deshell"

KeychainLookup = Callable[[str], str | None]


class ServiceProfile(BaseModel):
    """Static description of one proxy service."""

    model_config = ConfigDict(frozen=True)

    name_prefix: str
    header_name: str
    default_base_url: str
    server_name: str
    api_key_env: str
    base_url_env: str
    enabled_variants: tuple[Variant, ...] = ()
    keychain_service: str | None = None

    def tool_name(self, suffix: str) -> str:
        return f"{self.name_prefix}_{suffix}"


class ProxyCredentials(BaseModel):
    """Resolved, read-only connection settings for the proxy."""

    model_config = ConfigDict(frozen=True)

    header_name: str
    api_key: str = ""
    base_url: str

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


DESHELL = ServiceProfile(
    name_prefix="deshell",
    header_name="X-DeShell-Key",
    default_base_url="https://proxy.deshell.ai",
    server_name="@deshell/mcp",
    api_key_env="DESHELL_API_KEY",
    base_url_env="DESHELL_PROXY_URL",
    keychain_service="deshell",
)

DISTIL = ServiceProfile(
    name_prefix="distil",
    header_name="X-Distil-Key",
    default_base_url="https://proxy.distil.net",
    server_name="distil-mcp",
    api_key_env="DISTIL_API_KEY",
    base_url_env="DISTIL_PROXY_URL",
    enabled_variants=VARIANT_ORDER,
    keychain_service="distil",
)

PROFILES: dict[str, ServiceProfile] = {
    "deshell": DESHELL,
    "distil": DISTIL,
}


def get_profile(name: str) -> ServiceProfile:
    """Look up a built-in profile by name."""
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        msg = f"Unknown profile {name!r} (expected one of: {known})"
        raise ValueError(msg) from None


def resolve_credentials(
    profile: ServiceProfile,
    environ: Mapping[str, str] | None = None,
    keychain: KeychainLookup | None = None,
) -> ProxyCredentials:
    """Build the credentials for *profile* from the environment.

    The API key comes from ``profile.api_key_env``; if that is empty and a
    *keychain* lookup is supplied, the profile's keychain service is tried
    next. The base URL defaults to the profile's origin and never keeps a
    trailing slash. A missing key is not an error here: tool calls fail
    individually instead.
    """
    env = os.environ if environ is None else environ

    api_key = env.get(profile.api_key_env, "")
    if not api_key and keychain is not None and profile.keychain_service:
        api_key = keychain(profile.keychain_service) or ""
        if api_key:
            logger.debug("Using API key from keychain service %s", profile.keychain_service)

    base_url = (env.get(profile.base_url_env) or profile.default_base_url).rstrip("/")

    return ProxyCredentials(
        header_name=profile.header_name,
        api_key=api_key,
        base_url=base_url,
    )


def keychain_lookup(service: str) -> str | None:
    """Read a generic password from the macOS keychain.

    Returns ``None`` on other platforms or when the entry is missing.
    """
    if sys.platform != "darwin":
        return None
    try:
        proc = subprocess.run(
            ["security", "find-generic-password", "-s", service, "-w"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("Keychain lookup for %s failed: %s", service, exc)
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None
