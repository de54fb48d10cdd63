from __future__ import annotations

from commitlens_core.providers.anthropic import AnthropicReviewer
from commitlens_core.providers.base import BaseReviewer
from commitlens_core.providers.openai import OpenAIReviewer

PROVIDERS = ("openai", "anthropic")


def get_reviewer(config: dict) -> BaseReviewer:
    """Build the configured provider from explicit config values.

    Raises ValueError for an unknown provider or a missing API key, before
    any request is made.
    """
    provider = config.get("provider", "openai")
    options = {
        "model": config.get("model"),
        "max_tokens": config.get("max_tokens"),
        "timeout": config.get("timeout"),
        "instruction": config.get("instruction"),
    }
    if provider == "openai":
        if not config.get("openai_api_key"):
            raise ValueError("OPENAI_API_KEY environment variable is not set.")
        return OpenAIReviewer(api_key=config["openai_api_key"], base_url=config.get("base_url"), **options)
    if provider == "anthropic":
        if not config.get("anthropic_api_key"):
            raise ValueError("ANTHROPIC_API_KEY environment variable is not set.")
        return AnthropicReviewer(api_key=config["anthropic_api_key"], **options)
    raise ValueError(f"Unknown model provider: {provider!r}. Choose 'openai' or 'anthropic'.")


__all__ = ["AnthropicReviewer", "BaseReviewer", "OpenAIReviewer", "PROVIDERS", "get_reviewer"]
