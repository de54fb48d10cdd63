"""review command — review staged files and annotate the HEAD commit."""

from __future__ import annotations

import os

import click
from rich.console import Console

from commitlens_core.git.repository import ACTIVE_ENV_VAR, GitError
from commitlens_core.providers import PROVIDERS
from commitlens_core.reviewer import ReviewOutcome, run_review

console = Console()

EXIT_BLOCKED = 1


@click.command("review")
@click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    default=None,
    help="AI provider. Overrides config file.",
)
@click.option("--model", default=None, help="Model identifier. Overrides config file.")
@click.option(
    "--guidelines",
    "guidelines_path",
    default=None,
    help="Path to a Markdown guidelines file. Overrides the configured rules.",
)
@click.option(
    "--gate/--no-gate",
    "gate_enabled",
    default=None,
    help="Block the commit when a review contains a configured trigger phrase.",
)
@click.option("--dry-run", is_flag=True, help="Print the review without amending the commit.")
@click.option(
    "--last-commit",
    is_flag=True,
    help="Review the files of the HEAD commit instead of the staged files (used by the post-commit hook).",
)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    default=None,
    help="Repository directory (default: current directory).",
)
@click.pass_context
def review_cmd(
    ctx,
    provider: str | None,
    model: str | None,
    guidelines_path: str | None,
    gate_enabled: bool | None,
    dry_run: bool,
    last_commit: bool,
    repo_path: str | None,
):
    """Review staged JavaScript/TypeScript files with an LLM.

    Each review is appended to the HEAD commit message under a review
    header. Exits with status 1 when the gate finds a rule violation.

    \b
    Required environment variables:
      OPENAI_API_KEY       Required when using --provider openai (default)
      ANTHROPIC_API_KEY    Required when using --provider anthropic
    """
    from commitlens_core.config import load_config

    if os.environ.get(ACTIVE_ENV_VAR):
        # Invoked from a hook fired by our own amend.
        return

    config_path = ctx.obj.get("config_path", ".commitlens.yml") if ctx.obj else ".commitlens.yml"
    if repo_path and not os.path.isabs(config_path):
        config_path = os.path.join(repo_path, config_path)

    try:
        config = load_config(
            config_path,
            cli_overrides={
                "provider": provider,
                "model": model,
                "guidelines": guidelines_path,
                "gate_enabled": gate_enabled,
            },
            base_dir=repo_path,
        )
        summary = run_review(config, cwd=repo_path, dry_run=dry_run, last_commit=last_commit)
    except ValueError as e:
        raise click.UsageError(str(e))
    except (GitError, FileNotFoundError) as e:
        raise click.ClickException(str(e))

    if summary.outcome is ReviewOutcome.BLOCKED:
        console.print("[red]Commit message left unchanged. Address the flagged file and retry.[/red]")
        ctx.exit(EXIT_BLOCKED)
