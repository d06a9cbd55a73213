from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_WELCOME_TITLE = "Welcome"
_DEFAULT_WELCOME_BODY = "Create a note, edit it, or delete it. Everything stays in memory."
_THEMES = {"light", "dark"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _getenv_theme(name: str, default: str) -> str:
    value = _getenv_str(name, default).strip().lower()
    if value not in _THEMES:
        raise ValueError(f"{name} must be one of {sorted(_THEMES)}, got {value!r}")
    return value


def _getenv_log_level(name: str, default: str) -> str:
    value = _getenv_str(name, default).strip().upper() or default
    if value not in _LOG_LEVELS:
        raise ValueError(f"{name} must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
    return value


@dataclass(frozen=True)
class AppConfig:
    QUICKNOTES_SEED_WELCOME: bool
    QUICKNOTES_WELCOME_TITLE: str
    QUICKNOTES_WELCOME_BODY: str
    QUICKNOTES_AUDIT_MAX_EVENTS: int
    QUICKNOTES_LOG_LEVEL: str
    QUICKNOTES_CORS_ORIGINS: tuple[str, ...]
    QUICKNOTES_DEFAULT_THEME: str


def load_config() -> AppConfig:
    return AppConfig(
        QUICKNOTES_SEED_WELCOME=_getenv_bool("QUICKNOTES_SEED_WELCOME", True),
        QUICKNOTES_WELCOME_TITLE=_getenv_str("QUICKNOTES_WELCOME_TITLE", _DEFAULT_WELCOME_TITLE),
        QUICKNOTES_WELCOME_BODY=_getenv_str("QUICKNOTES_WELCOME_BODY", _DEFAULT_WELCOME_BODY),
        QUICKNOTES_AUDIT_MAX_EVENTS=max(1, _getenv_int("QUICKNOTES_AUDIT_MAX_EVENTS", 500)),
        QUICKNOTES_LOG_LEVEL=_getenv_log_level("QUICKNOTES_LOG_LEVEL", "INFO"),
        QUICKNOTES_CORS_ORIGINS=_getenv_list("QUICKNOTES_CORS_ORIGINS", ("*",)),
        QUICKNOTES_DEFAULT_THEME=_getenv_theme("QUICKNOTES_DEFAULT_THEME", "light"),
    )
