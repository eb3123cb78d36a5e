"""One-shot commands: run a single tool call and print the result.

``mdproxy scrape URL``, ``mdproxy search QUERY...`` and the variant
commands print the proxy's text followed by a newline and exit 0, or
print ``Error: <message>`` to stderr and exit 1.
"""

from __future__ import annotations

import asyncio
from typing import Any

import click

from mdproxy.config import (
    PROFILES,
    VARIANT_ORDER,
    ServiceProfile,
    keychain_lookup,
    resolve_credentials,
)


def run_tool(profile: ServiceProfile, suffix: str, arguments: dict[str, Any]) -> None:
    """Invoke ``<prefix>_<suffix>`` once and exit the way scripts expect."""
    from mdproxy.app import build_invoker

    credentials = resolve_credentials(profile, keychain=keychain_lookup)
    invoker = build_invoker(profile, credentials)
    try:
        text = asyncio.run(invoker.invoke(profile.tool_name(suffix), arguments))
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    click.echo(text)


@click.command()
@click.argument("url")
@click.pass_obj
def scrape(profile: ServiceProfile, url: str) -> None:
    """Fetch URL through the proxy and print it as Markdown."""
    run_tool(profile, "scrape", {"url": url})


@click.command()
@click.argument("query", nargs=-1, required=True)
@click.pass_obj
def search(profile: ServiceProfile, query: tuple[str, ...]) -> None:
    """Search the web and print the results as Markdown."""
    run_tool(profile, "search", {"query": " ".join(query)})


def _variant_command(variant: str) -> click.Command:
    profiles = ", ".join(
        name for name, p in sorted(PROFILES.items()) if variant in p.enabled_variants
    )

    @click.command(
        name=variant, help=f"Fetch URL with the proxy's {variant} mode ({profiles} profile only)."
    )
    @click.argument("url")
    @click.pass_obj
    def command(profile: ServiceProfile, url: str) -> None:
        if variant not in profile.enabled_variants:
            msg = f"{variant!r} is not available with the {profile.name_prefix!r} profile"
            raise click.UsageError(msg)
        run_tool(profile, variant, {"url": url})

    return command


ONESHOT_COMMANDS: list[click.Command] = [
    scrape,
    search,
    *(_variant_command(v) for v in VARIANT_ORDER),
]
