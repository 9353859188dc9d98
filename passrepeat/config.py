# passrepeat/config.py
"""
Scan settings for passrepeat, stored as JSON.

Location: $PASSREPEAT_CONFIG_DIR if set, else %APPDATA%/PassRepeat (Windows),
else ~/.passrepeat. Missing keys fall back to DEFAULTS; a missing or
unreadable file means all defaults.
"""

import os
import json
from typing import Dict, Any, Optional

from .errors import PassRepeatError, PasswordTooLongError

DEFAULTS: Dict[str, Any] = {
    "max_password_length": 256,
    "max_depth": 8,
    "wordlist_path": None  # extra newline-delimited words, most common first
}

# settings that must hold an integer; the rest may be unset
INT_SETTINGS = {key for key, value in DEFAULTS.items() if isinstance(value, int)}


def config_dir() -> str:
    d = os.getenv("PASSREPEAT_CONFIG_DIR")
    if not d:
        base = os.getenv("APPDATA")
        d = os.path.join(base, "PassRepeat") if base else os.path.join(os.path.expanduser("~"), ".passrepeat")
    os.makedirs(d, exist_ok=True)
    return d


def config_path() -> str:
    return os.path.join(config_dir(), "config.json")


def load_config() -> Dict[str, Any]:
    cfg = dict(DEFAULTS)
    try:
        with open(config_path(), "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (OSError, ValueError):
        return cfg
    if isinstance(stored, dict):
        cfg.update(stored)
    return cfg


def save_config(cfg: Dict[str, Any]) -> None:
    with open(config_path(), "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def parse_setting(key: str, value: str) -> Optional[Any]:
    """Turn a command-line value into the stored form for key."""
    if key not in DEFAULTS:
        raise PassRepeatError(f"unknown setting {key!r} (choose from {', '.join(DEFAULTS)})")
    if key in INT_SETTINGS:
        return int_setting({key: value}, key)
    if value.lower() in ("none", "null", ""):
        return None
    return value


def int_setting(cfg: Dict[str, Any], key: str) -> int:
    """Read an integer setting, rejecting null or non-numeric values."""
    value = cfg.get(key, DEFAULTS[key])
    if isinstance(value, bool) or value is None:
        raise PassRepeatError(f"{key} expects an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PassRepeatError(f"{key} expects an integer, got {value!r}") from None


def check_length(password: str, cfg: Dict[str, Any]) -> None:
    """Raise PasswordTooLongError when password exceeds the scan budget."""
    limit = int_setting(cfg, "max_password_length")
    if len(password) > limit:
        raise PasswordTooLongError(len(password), limit)
