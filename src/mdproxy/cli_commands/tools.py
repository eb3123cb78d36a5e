"""``mdproxy tools``: list the tools the active profile exposes."""

from __future__ import annotations

import click

from mdproxy.cli_commands._output import print_tools_table
from mdproxy.config import ServiceProfile
from mdproxy.tools.registry import ToolRegistry


@click.command()
@click.pass_obj
def tools(profile: ServiceProfile) -> None:
    """List available tools for the selected profile."""
    print_tools_table(ToolRegistry.for_profile(profile).descriptors())
