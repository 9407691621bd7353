import os

import pytest

import body_language_analyst.config as cfg_mod
from body_language_analyst import ConfigError, load_config, read_prompt_file


def test_missing_api_key_raises():
    with pytest.raises(ConfigError) as exc:
        load_config()
    assert "OPENAI_API_KEY is not set" in str(exc.value)


def test_missing_api_key_tolerated_when_not_required():
    cfg = load_config(require_api_key=False)
    assert cfg.api_key is None
    assert cfg.model == "gpt-4.1-mini"
    assert cfg.provider == "openai"


def test_defaults_and_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "x")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    monkeypatch.setenv("OPENAI_TIMEOUT", "30")
    monkeypatch.setenv("ANALYST_PROVIDER", "HTTP")
    monkeypatch.setenv("DEBUG", "yes")
    cfg = load_config()
    assert cfg.api_key == "x"
    assert cfg.model == "gpt-test"
    assert cfg.timeout == 30
    assert cfg.max_tokens == 2048
    assert cfg.provider == "http"
    assert cfg.debug is True


def test_invalid_int_falls_back_to_default(monkeypatch, capsys):
    monkeypatch.setenv("OPENAI_API_KEY", "x")
    monkeypatch.setenv("OPENAI_MAX_TOKENS", "lots")
    cfg = load_config()
    assert cfg.max_tokens == 2048
    assert "invalid OPENAI_MAX_TOKENS" in capsys.readouterr().err


def test_load_config_reads_dotenv(monkeypatch, tmp_path, real_env_discovery):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=dot-env-key\nOPENAI_MODEL=test-model\nPROMPT_FILE=custom.txt\n")
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(env_file))

    cfg = load_config()
    assert cfg.api_key == "dot-env-key"
    assert cfg.model == "test-model"
    assert cfg.prompt_file == "custom.txt"


def test_load_config_finds_env_in_parent(monkeypatch, tmp_path, real_env_discovery):
    root = tmp_path / "proj"
    sub = root / "a" / "b"
    sub.mkdir(parents=True)
    (root / ".env").write_text("OPENAI_API_KEY=parent-key\nOPENAI_MODEL=parent-model\n")
    monkeypatch.chdir(sub)
    # force the fallback search
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: "")

    cfg = load_config()
    assert cfg.api_key == "parent-key"
    assert cfg.model == "parent-model"
    assert os.environ.get("OPENAI_MODEL") == "parent-model"


def test_read_prompt_file_missing(tmp_path, capsys):
    res = read_prompt_file(str(tmp_path / "not_exists.txt"))
    assert res == ""
    assert "ERROR: failed to read PROMPT_FILE" in capsys.readouterr().err


def test_read_prompt_file_empty_path():
    assert read_prompt_file(None) == ""
