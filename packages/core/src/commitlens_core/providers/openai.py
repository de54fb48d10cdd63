from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from commitlens_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    MODEL = "gpt-4"

    def __init__(self, api_key: str, base_url: str | None = None, **kwargs):
        super().__init__(**kwargs)
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install openai"
            )
        # max_retries=0: one request per file, failures are reported, not retried.
        self.client = _OpenAI(api_key=api_key, base_url=base_url, timeout=self.timeout, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=self.max_tokens,
        )
        if not response.choices:
            raise ValueError("response contained no choices")
        content = response.choices[0].message.content
        if not isinstance(content, str):
            raise ValueError("response message has no text content")
        return content
