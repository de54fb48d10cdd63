"""Append review text to the HEAD commit message."""

from __future__ import annotations

import logging

from commitlens_core.config import REVIEW_HEADER
from commitlens_core.git.repository import amend_head_message, get_head_message

logger = logging.getLogger(__name__)


def build_annotated_message(original: str, summary_text: str, header: str = REVIEW_HEADER) -> str:
    """Original message, a blank line, the header, then the review summary.

    Applying this twice appends a second header and summary; existing
    review blocks are not detected or replaced.
    """
    return f"{original.rstrip()}\n\n{header}\n{summary_text}"


def annotate_commit(summary_text: str | None, header: str = REVIEW_HEADER, cwd: str | None = None) -> bool:
    """Amend HEAD so its message ends with the review summary.

    Returns False without touching git when there is nothing to append.
    Raises GitError if the message cannot be read or rewritten; the commit
    is left as it was in that case.
    """
    if not summary_text or not summary_text.strip():
        return False
    original = get_head_message(cwd=cwd)
    amend_head_message(build_annotated_message(original, summary_text, header), cwd=cwd)
    logger.debug("Amended HEAD message with %d characters of review", len(summary_text))
    return True
