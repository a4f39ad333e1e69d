"""
Configuration and environment loading for the LLM chess opponent.

- Loads a YAML settings file (LLMCHESS_SETTINGS, default ./settings.yml) if present; falls back to environment variables.
- A .env file in the working directory is loaded into the environment first.
- load_settings() returns a frozen Settings; entry points call it once and pass it down.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import yaml
from dotenv import load_dotenv

log = logging.getLogger("config")

DEFAULT_SETTINGS_PATH = "settings.yml"
DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        log.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: top level is not a mapping", path)
        return {}
    return data


@dataclass(frozen=True)
class Settings:
    # Auth / endpoint (OpenAI-compatible chat completions)
    llm_api_key: str = ""
    api_base: str = DEFAULT_API_BASE
    model: str = DEFAULT_MODEL

    # Request knobs
    request_timeout_s: float = 20.0
    max_output_tokens: int = 10

    # Process
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def has_credential(self) -> bool:
        return bool(self.llm_api_key.strip())


def load_settings(path: str | None = None, environ: Mapping[str, str] | None = None, use_dotenv: bool = True) -> Settings:
    """Resolve Settings with precedence: YAML file -> environment -> defaults.

    Several keys may name one setting (project-specific first, then the
    conventional OpenAI variable); the first one present wins.
    """
    if use_dotenv and environ is None:
        load_dotenv()
    env = os.environ if environ is None else environ
    cfg = _load_yaml(path or env.get("LLMCHESS_SETTINGS") or DEFAULT_SETTINGS_PATH)

    def _get(names: tuple[str, ...], default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
        for name in names:
            if name in cfg and cfg[name] is not None:
                return cast(cfg[name]) if cast else cfg[name]
        for name in names:
            val = env.get(name)
            if val is not None:
                return cast(val) if cast else val
        return default

    return Settings(
        llm_api_key=str(_get(("LLMCHESS_LLM_API_KEY", "OPENAI_API_KEY"), "")).strip(),
        api_base=str(_get(("LLMCHESS_LLM_BASE_URL", "OPENAI_BASE_URL"), DEFAULT_API_BASE)),
        model=str(_get(("LLMCHESS_MODEL",), DEFAULT_MODEL)),
        request_timeout_s=_get(("LLMCHESS_REQUEST_TIMEOUT_S",), 20.0, cast=float),
        max_output_tokens=_get(("LLMCHESS_MAX_OUTPUT_TOKENS",), 10, cast=int),
        log_level=str(_get(("LLMCHESS_LOG_LEVEL",), "INFO")).upper(),
        host=str(_get(("LLMCHESS_HOST",), "127.0.0.1")),
        port=_get(("LLMCHESS_PORT",), 8000, cast=int),
    )
