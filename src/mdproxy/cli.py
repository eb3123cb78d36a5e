"""mdproxy CLI entrypoint."""

from __future__ import annotations

import click

from mdproxy import __version__
from mdproxy.config import DEFAULT_PROFILE, PROFILE_ENV, PROFILES, get_profile
from mdproxy.utils.log import LOG_LEVEL_ENV, configure_logging
from mdproxy.utils.telemetry import OTLP_ENDPOINT_ENV, configure_telemetry


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mdproxy")
@click.option(
    "--profile",
    type=click.Choice(sorted(PROFILES)),
    default=DEFAULT_PROFILE,
    envvar=PROFILE_ENV,
    show_default=True,
    help="Proxy service to talk to.",
)
@click.option(
    "--log-level",
    default=None,
    envvar=LOG_LEVEL_ENV,
    help="Log level for stderr output (default: WARNING).",
)
@click.option(
    "--otlp-endpoint",
    default=None,
    envvar=OTLP_ENDPOINT_ENV,
    help="Export traces via OTLP/gRPC (requires mdproxy[otel]).",
)
@click.pass_context
def main(
    ctx: click.Context, profile: str, log_level: str | None, otlp_endpoint: str | None
) -> None:
    """mdproxy: MCP server for Markdown content proxies.

    Without a subcommand, serves MCP over stdio.
    """
    configure_logging(log_level)
    if otlp_endpoint:
        configure_telemetry(service_name="mdproxy", otlp_endpoint=otlp_endpoint)
    ctx.obj = get_profile(profile)
    if ctx.invoked_subcommand is None:
        from mdproxy.cli_commands.serve import serve

        ctx.invoke(serve)


# Register subcommands
from mdproxy.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
