"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review() → _build_system_prompt() + _build_user_prompt()
             → _call_once() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Reviews are free-form text; nothing is parsed out of the response.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from commitlens_core.config import DEFAULT_INSTRUCTION

logger = logging.getLogger(__name__)

_MAX_TOKENS = 700
_TIMEOUT = 60.0


class BaseReviewer(ABC):
    MODEL: str = ""
    MAX_TOKENS: int = _MAX_TOKENS
    TIMEOUT: float = _TIMEOUT

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        instruction: str | None = None,
    ):
        self.model = model or self.MODEL
        self.max_tokens = max_tokens or self.MAX_TOKENS
        self.timeout = timeout or self.TIMEOUT
        self.instruction = instruction or DEFAULT_INSTRUCTION

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def review(self, file_name: str, file_content: str, guidelines: str) -> str | None:
        """Review one file and return the model's text, or None on failure.

        Failures are logged and swallowed so the caller can move on to the
        next file; an empty completion is treated the same as a failure.
        """
        system = self._build_system_prompt(guidelines)
        user = self._build_user_prompt(file_name, file_content)
        text = self._call_once(file_name, system, user)
        if text is None or not text.strip():
            return None
        return text

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        It should raise on any transport, HTTP or response-shape failure.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_once(self, file_name: str, system_prompt: str, user_prompt: str) -> str | None:
        try:
            return self._call_api(system_prompt, user_prompt)
        except Exception as e:
            logger.error("%s failed to review %s: %s", self.__class__.__name__, file_name, e)
            return None

    def _build_system_prompt(self, guidelines: str) -> str:
        return guidelines.strip()

    def _build_user_prompt(self, file_name: str, file_content: str) -> str:
        """Instruction first, then the file tagged with its path."""
        return f"""{self.instruction}

File: {file_name}

{file_content}"""
