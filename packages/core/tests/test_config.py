"""Tests for configuration loading."""

import pytest

from commitlens_core.config import DEFAULT_GATE_PHRASES, REVIEW_HEADER, load_config, load_guidelines, render_rules


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # load_config reads .env from the working directory and load_dotenv writes
    # into os.environ; setenv first so teardown restores the original state.
    monkeypatch.chdir(tmp_path)
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["provider"] == "openai"
    assert config["model"] is None
    assert config["max_tokens"] == 700
    assert config["timeout"] == 60
    assert config["extensions"] == [".js", ".jsx", ".ts", ".tsx"]
    assert config["exclude"] == []
    assert config["guidelines"] is None
    assert config["header"] == REVIEW_HEADER
    assert config["gate"] == {"enabled": True, "phrases": DEFAULT_GATE_PHRASES}


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: anthropic\nmax_tokens: 500\n")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "anthropic"
    assert config["max_tokens"] == 500


def test_gate_mapping_merged_key_by_key(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("gate:\n  enabled: false\n")
    config = load_config(config_path=str(cfg))
    assert config["gate"]["enabled"] is False
    assert config["gate"]["phrases"] == DEFAULT_GATE_PHRASES


def test_gate_phrases_replaced_from_file(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("gate:\n  phrases:\n    - innerHTML\n")
    config = load_config(config_path=str(cfg))
    assert config["gate"] == {"enabled": True, "phrases": ["innerHTML"]}


def test_rules_list_loaded(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("rules:\n  - No default exports.\n  - Prefer named hooks.\n")
    config = load_config(config_path=str(cfg))
    assert config["rules"] == ["No default exports.", "Prefer named hooks."]


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="YAML mapping"):
        load_config(config_path=str(cfg))


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": "openai"})
    assert config["provider"] == "openai"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": None, "gate_enabled": None})
    assert config["provider"] == "anthropic"
    assert config["gate"]["enabled"] is True


def test_gate_enabled_override(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), cli_overrides={"gate_enabled": False})
    assert config["gate"]["enabled"] is False


def test_custom_guidelines_path(tmp_path):
    guidelines_file = tmp_path / "my-guidelines.md"
    guidelines_file.write_text("# Custom Guidelines\n- Rule 1")
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text(f"guidelines: {guidelines_file}\n")
    config = load_config(config_path=str(cfg))
    content = load_guidelines(config)
    assert "Custom Guidelines" in content


def test_rules_rendered_when_no_guidelines_file():
    content = load_guidelines({"guidelines": None, "rules": ["First rule.", "Second rule."]})
    assert "1. First rule." in content
    assert "2. Second rule." in content


def test_builtin_rules_used_as_fallback(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    content = load_guidelines(config)
    assert "UPPER_SNAKE_CASE" in content
    assert "dangerouslySetInnerHTML" in content


def test_missing_custom_guidelines_raises(tmp_path):
    config = {"guidelines": str(tmp_path / "does-not-exist.md")}
    with pytest.raises(FileNotFoundError):
        load_guidelines(config)


def test_render_rules_numbers_from_one():
    assert render_rules(["a"]).splitlines()[1] == "1. a"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["openai_api_key"] == "oai-key"
    assert config["anthropic_api_key"] == "ant-key"


def test_dotenv_file_loaded(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("OPENAI_API_KEY=from-dotenv\n")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["openai_api_key"] == "from-dotenv"


def test_exported_env_var_wins_over_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("OPENAI_API_KEY=from-dotenv\n")
    monkeypatch.setenv("OPENAI_API_KEY", "exported")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["openai_api_key"] == "exported"


def test_missing_key_is_none(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["openai_api_key"] is None


def test_list_defaults_are_not_shared_references(tmp_path):
    """Mutating one config's lists must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["exclude"].append("vendor/")
    config_a["gate"]["phrases"].append("extra")
    config_a["gate"]["enabled"] = False
    assert config_b["exclude"] == []
    assert "extra" not in config_b["gate"]["phrases"]
    assert config_b["gate"]["enabled"] is True


def test_gate_false_shorthand_disables_gate(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("gate: false\n")
    config = load_config(config_path=str(cfg))
    assert config["gate"]["enabled"] is False
    assert config["gate"]["phrases"] == DEFAULT_GATE_PHRASES


def test_gate_true_shorthand_enables_gate(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("gate: true\n")
    config = load_config(config_path=str(cfg))
    assert config["gate"] == {"enabled": True, "phrases": DEFAULT_GATE_PHRASES}


def test_gate_with_invalid_type_raises(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("gate:\n  - UPPER_SNAKE_CASE\n")
    with pytest.raises(ValueError, match="gate must be a mapping"):
        load_config(config_path=str(cfg))


def test_relative_guidelines_resolved_against_base_dir(tmp_path):
    repo = tmp_path / "repo"
    (repo / "docs").mkdir(parents=True)
    (repo / "docs" / "review.md").write_text("# Repo guidelines\n")
    cfg = repo / ".commitlens.yml"
    cfg.write_text("guidelines: docs/review.md\n")

    # The working directory is tmp_path, not the repository.
    config = load_config(config_path=str(cfg), base_dir=str(repo))

    assert config["guidelines"] == str(repo / "docs" / "review.md")
    assert "Repo guidelines" in load_guidelines(config)


def test_guidelines_override_not_rebased(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    config = load_config(
        config_path=str(repo / ".commitlens.yml"),
        cli_overrides={"guidelines": "mine.md"},
        base_dir=str(repo),
    )
    assert config["guidelines"] == "mine.md"


def test_dotenv_loaded_from_base_dir(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".env").write_text("OPENAI_API_KEY=from-repo\n")
    config = load_config(config_path=str(repo / "nonexistent.yml"), base_dir=str(repo))
    assert config["openai_api_key"] == "from-repo"
