"""CLI entry point for commitlens.

Commands:
  review   — review staged files and append the result to the HEAD commit message
  init     — write .commitlens.yml and optionally install a git hook
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from commitlens_cli.commands.init import init_cmd
from commitlens_cli.commands.review import review_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("commitlens"),
    prog_name="commitlens",
)
@click.option(
    "--config",
    "config_path",
    default=".commitlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="COMMITLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI code review for staged files, recorded in the commit message."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(review_cmd)
main.add_command(init_cmd)
