"""init command — write .commitlens.yml and install the git hook.

The hook runs ``commitlens review --last-commit`` after every commit. By then
the index matches HEAD, so the hook reviews the files of the commit that was
just made and the review lands in its message.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import click
import yaml
from rich.console import Console

from commitlens_core.git.repository import GitError, get_hooks_dir
from commitlens_core.providers import PROVIDERS

console = Console()

HOOK_NAME = "post-commit"
HOOK_MARKER = "# installed by commitlens"

_HOOK_TEMPLATE = """\
#!/bin/sh
{marker}
exec commitlens review --last-commit
"""


@click.command("init")
@click.option("--hook/--no-hook", default=True, show_default=True, help=f"Install a {HOOK_NAME} git hook.")
@click.option("--force", is_flag=True, help="Overwrite an existing hook that commitlens did not install.")
@click.pass_context
def init_cmd(ctx, hook: bool, force: bool):
    """Set up commitlens for this repository.

    Creates .commitlens.yml and optionally installs a git hook that reviews
    the committed files after every commit.
    """
    console.print("\n[bold cyan]commitlens init[/bold cyan] — repository setup\n")

    provider = click.prompt(
        "AI provider",
        type=click.Choice(PROVIDERS),
        default="openai",
    )
    api_key_env = "OPENAI_API_KEY" if provider == "openai" else "ANTHROPIC_API_KEY"
    gate = click.confirm("Block the commit when the review reports a constants violation?", default=True)

    config_path = ctx.obj.get("config_path", ".commitlens.yml") if ctx.obj else ".commitlens.yml"
    _write_config(Path(config_path), {"provider": provider, "gate": {"enabled": gate}})
    console.print(f"[green]Created {config_path}[/green]")

    if hook:
        try:
            hook_path = _install_hook(force=force)
        except GitError as e:
            raise click.ClickException(f"Not inside a git repository: {e}")
        if hook_path is None:
            console.print(
                f"[yellow]A {HOOK_NAME} hook already exists and was not installed by commitlens. "
                "Re-run with --force to replace it.[/yellow]"
            )
        else:
            console.print(f"[green]Installed {hook_path}[/green]")

    if not os.environ.get(api_key_env):
        console.print(f"\n[yellow]Remember to export [bold]{api_key_env}[/bold] or add it to .env.[/yellow]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run a review manually with: [bold]commitlens review --dry-run[/bold]")


def _write_config(path: Path, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    gate = {**(existing.get("gate") or {}), **config.pop("gate", {})}
    existing.update(config)
    existing["gate"] = gate
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False, allow_unicode=True), encoding="utf-8")


def _install_hook(force: bool = False) -> Path | None:
    """Write the hook script; returns None when a foreign hook is in the way."""
    hooks_dir = Path(get_hooks_dir())
    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / HOOK_NAME
    if hook_path.exists() and not force and HOOK_MARKER not in hook_path.read_text(encoding="utf-8"):
        return None
    hook_path.write_text(_HOOK_TEMPLATE.format(marker=HOOK_MARKER), encoding="utf-8")
    hook_path.chmod(hook_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook_path
