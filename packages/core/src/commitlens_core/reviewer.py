"""Core review orchestration: staged files → per-file reviews → commit message."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from rich.console import Console
from rich.markup import escape

from commitlens_core.annotator import annotate_commit
from commitlens_core.config import REVIEW_HEADER, load_guidelines
from commitlens_core.git.repository import get_commit_files, get_staged_files
from commitlens_core.providers import BaseReviewer, get_reviewer
from commitlens_core.utils.code import REVIEWABLE_EXTENSIONS, is_excluded, is_reviewable, read_source_file

console = Console()
logger = logging.getLogger(__name__)

FILE_MARKER = "📄"


class ReviewOutcome(Enum):
    NO_FILES = "no_files"
    COMPLETED = "completed"
    BLOCKED = "blocked"


@dataclass
class FileReview:
    """What happened to one candidate file."""

    path: str
    review: str | None = None
    error: str | None = None


@dataclass
class ReviewSummary:
    """Result returned by run_review.

    ``outcome`` drives the process exit status in the CLI; the core never
    exits the interpreter itself.
    """

    outcome: ReviewOutcome
    candidate_files: list[str] = field(default_factory=list)
    files: list[FileReview] = field(default_factory=list)
    blocked_file: str | None = None
    blocked_phrase: str | None = None
    annotated: bool = False
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def reviewed_files(self) -> list[str]:
        return [f.path for f in self.files if f.review]

    @property
    def failed_files(self) -> list[str]:
        return [f.path for f in self.files if not f.review]

    def text(self) -> str:
        """Per-file blocks in processing order; empty when no file has a review."""
        return render_summary(self.files)


def render_summary(files: list[FileReview]) -> str:
    blocks = [f"{FILE_MARKER} {f.path}:\n{f.review.strip()}" for f in files if f.review and f.review.strip()]
    return "\n\n".join(blocks)


def find_gate_violation(review_text: str, phrases: list[str]) -> str | None:
    """Return the first trigger phrase found in the review text, if any."""
    for phrase in phrases:
        if phrase and phrase in review_text:
            return phrase
    return None


def _gate_phrases(config: dict) -> list[str]:
    gate = config.get("gate") or {}
    if not gate.get("enabled", False):
        return []
    return list(gate.get("phrases") or [])


def list_candidate_files(config: dict, cwd: str | None = None, last_commit: bool = False) -> list[str]:
    """Reviewable, non-excluded files in git's order.

    Files come from the index, or with ``last_commit`` from the HEAD commit.
    """
    extensions = config.get("extensions") or REVIEWABLE_EXTENSIONS
    exclude_patterns = config.get("exclude") or []
    return [
        path
        for path in (get_commit_files(cwd=cwd) if last_commit else get_staged_files(cwd=cwd))
        if is_reviewable(path, extensions) and not is_excluded(path, exclude_patterns)
    ]


def review_file(reviewer: BaseReviewer, path: str, guidelines: str, cwd: str | None = None) -> FileReview:
    try:
        content = read_source_file(path, cwd=cwd)
    except OSError as e:
        logger.error("Could not read %s: %s", path, e)
        return FileReview(path=path, error=f"read failed: {e}")

    text = reviewer.review(file_name=path, file_content=content, guidelines=guidelines)
    if text is None:
        return FileReview(path=path, error="no review returned")
    return FileReview(path=path, review=text)


def run_review(
    config: dict,
    reviewer: BaseReviewer | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
    last_commit: bool = False,
) -> ReviewSummary:
    """Run the staged-file review pipeline and return a ReviewSummary.

    Git failures raise GitError and configuration problems raise ValueError.
    A gate hit stops the loop and returns a BLOCKED summary without touching
    the commit. With ``dry_run`` the summary is built but HEAD is not amended.
    With ``last_commit`` the files of the HEAD commit are reviewed instead of
    the staged ones, which is what the post-commit hook needs.
    """
    candidates = list_candidate_files(config, cwd=cwd, last_commit=last_commit)
    source = "committed" if last_commit else "staged"
    if not candidates:
        console.print(f"[green]No {source} files to review. Skipping review.[/green]")
        return ReviewSummary(outcome=ReviewOutcome.NO_FILES)

    console.print(f"{source.capitalize()} files to review: {', '.join(escape(p) for p in candidates)}")

    if reviewer is None:
        reviewer = get_reviewer(config)
    guidelines = load_guidelines(config)
    phrases = _gate_phrases(config)

    summary = ReviewSummary(outcome=ReviewOutcome.COMPLETED, candidate_files=candidates)
    total = len(candidates)

    for i, path in enumerate(candidates, 1):
        console.print(f"\n[[{i}/{total}]] Reviewing: {escape(path)}")
        result = review_file(reviewer, path, guidelines, cwd=cwd)
        summary.files.append(result)

        if result.review is None:
            console.print(f"  [red]Failed to review {escape(path)}: {escape(result.error or '')}[/red]")
            continue

        phrase = find_gate_violation(result.review, phrases)
        if phrase is not None:
            console.print(f"[bold red]Rule violation detected in {escape(path)}! Fix before committing.[/bold red]")
            console.print(f"  [dim]Matched: {escape(phrase)}[/dim]")
            summary.outcome = ReviewOutcome.BLOCKED
            summary.blocked_file = path
            summary.blocked_phrase = phrase
            return summary

    text = summary.text()
    if not text:
        console.print("[yellow]No reviews were returned. Commit message left unchanged.[/yellow]")
        return summary

    console.print(f"\n{escape(text)}")

    if dry_run:
        console.print("[bold]Dry run: commit message not amended.[/bold]")
        return summary

    summary.annotated = annotate_commit(text, header=config.get("header") or REVIEW_HEADER, cwd=cwd)
    console.print("\n[green]Code review added to commit message.[/green]")
    return summary
