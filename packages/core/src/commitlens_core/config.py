import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

REVIEW_HEADER = "🔍 ChatGPT Code Review:"

DEFAULT_RULES: list[str] = [
    "Ensure all React components follow best practices.",
    "Flag performance problems such as unnecessary re-renders or expensive work inside render.",
    "Flag security issues, e.g. use of dangerouslySetInnerHTML with unsanitised input.",
    "Check naming conventions: PascalCase components, camelCase functions and variables.",
    "Constants should be declared at the top of the file, use UPPER_SNAKE_CASE naming, "
    "and use `const` and not `let` or `var`.",
    "Hooks must only be called at the top level of components or custom hooks.",
    "useEffect dependency arrays must list every value the effect reads.",
    "Keep components small and modular; extract reusable logic into hooks or helpers.",
    "Prefer async/await over chained promises and handle rejected promises.",
    "Interactive elements need accessibility attributes (alt, aria-*, labels).",
]

DEFAULT_INSTRUCTION = (
    "Review this React code. Check if constants are at the top, use UPPER_SNAKE_CASE, " "and use 'const' not 'let'."
)

DEFAULT_GATE_PHRASES: list[str] = [
    "Constants should be at the top",
    "UPPER_SNAKE_CASE",
    "use `const` and not `let`",
]

DEFAULT_CONFIG: dict = {
    "provider": "openai",
    "model": None,  # None = provider default
    "base_url": None,  # None = provider's public endpoint
    "max_tokens": 700,
    "timeout": 60,
    "extensions": [".js", ".jsx", ".ts", ".tsx"],
    "exclude": [],  # fnmatch patterns or directory names to skip (e.g. "vendor/", "*.min.js")
    "rules": DEFAULT_RULES,
    "guidelines": None,  # path to a Markdown file; replaces the rules list when set
    "instruction": DEFAULT_INSTRUCTION,
    "header": REVIEW_HEADER,
    "gate": {"enabled": True, "phrases": DEFAULT_GATE_PHRASES},
}

_LIST_KEYS = ("extensions", "exclude", "rules")


def load_config(
    config_path: str = ".commitlens.yml",
    cli_overrides: Optional[dict] = None,
    base_dir: Optional[str] = None,
) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .commitlens.yml (in the repository directory)
      3. CLI argument overrides

    The ``gate`` mapping is merged key by key so a config file can toggle
    ``enabled`` without restating the phrase list; a bare boolean is shorthand
    for ``{enabled: <bool>}``.

    ``base_dir`` is the repository directory when it differs from the working
    directory. A relative ``guidelines`` path from the config file and the
    ``.env`` lookup are resolved against it.
    """
    config = {**DEFAULT_CONFIG}
    for key in _LIST_KEYS:
        config[key] = list(DEFAULT_CONFIG[key])
    config["gate"] = {**DEFAULT_CONFIG["gate"], "phrases": list(DEFAULT_GATE_PHRASES)}

    path = Path(config_path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"{config_path} must contain a YAML mapping.")
        file_gate = file_config.pop("gate", None)
        if file_gate is None:
            file_gate = {}
        elif isinstance(file_gate, bool):
            file_gate = {"enabled": file_gate}
        elif not isinstance(file_gate, dict):
            raise ValueError(f"{config_path}: gate must be a mapping or a boolean.")
        guidelines = file_config.get("guidelines")
        if base_dir and guidelines and not os.path.isabs(guidelines):
            file_config["guidelines"] = os.path.join(base_dir, guidelines)
        config.update(file_config)
        config["gate"].update(file_gate)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is None:
                continue
            if key == "gate_enabled":
                config["gate"]["enabled"] = value
            else:
                config[key] = value

    # Resolve credentials from the environment; a local .env never overrides
    # variables that are already exported.
    load_dotenv(dotenv_path=Path(base_dir or Path.cwd()) / ".env", override=False)
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config


def render_rules(rules: list[str]) -> str:
    lines = ["You are a React code reviewer. Follow these strict rules:"]
    for i, rule in enumerate(rules, 1):
        lines.append(f"{i}. {rule}")
    return "\n".join(lines)


def load_guidelines(config: dict) -> str:
    """
    Load review guidelines.

    If ``guidelines`` is set in config, loads from that path. load_config has
    already resolved a config-file path against the repository directory.
    Otherwise the ``rules`` list is rendered as a numbered rule set.
    """
    custom_path = config.get("guidelines")
    if custom_path:
        p = Path(custom_path)
        if not p.exists():
            raise FileNotFoundError(f"Guidelines file not found: {custom_path}")
        return p.read_text(encoding="utf-8")

    rules = config.get("rules") or DEFAULT_RULES
    return render_rules(rules)
