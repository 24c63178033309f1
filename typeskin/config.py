"""
TypeSkin Settings
=================
Process-wide knobs for the randomized checkers and the diagnostic renderer.

Read once from the environment:
    TYPESKIN_STATIC_ATTEMPTS   iterations per function contract during static time (256)
    TYPESKIN_COMPACT_ATTEMPTS  leading iterations that use compact samples (32)
    TYPESKIN_FORALL_ATTEMPTS   default attempt budget for forall (4096)
    TYPESKIN_SEED              seed for the shared RNG (unset = OS entropy)
    TYPESKIN_COLOR             1 / 0, colored diagnostics (1)
    TYPESKIN_WIDTH             diagnostic box width (60)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Configuration for checking and reporting."""

    static_attempts: int = 256      # Fn.test iterations while static time is open
    compact_attempts: int = 32      # First N iterations sample in compact mode
    forall_attempts: int = 4096     # forall() default budget
    seed: Optional[int] = None      # None = unseeded
    color: bool = True              # ANSI styles in rendered diagnostics
    width: int = 60                 # Rendered box width


_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _env_int(env: dict[str, str], key: str, default: Optional[int], minimum: int = 0) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    return value


def _env_bool(env: dict[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean flag, got {raw!r}")


def load_settings(env: Optional[dict[str, str]] = None) -> Settings:
    """Build Settings from environment variables (os.environ by default)."""
    env = dict(os.environ) if env is None else env
    return Settings(
        static_attempts=_env_int(env, "TYPESKIN_STATIC_ATTEMPTS", 256, minimum=1),
        compact_attempts=_env_int(env, "TYPESKIN_COMPACT_ATTEMPTS", 32),
        forall_attempts=_env_int(env, "TYPESKIN_FORALL_ATTEMPTS", 4096, minimum=1),
        seed=_env_int(env, "TYPESKIN_SEED", None, minimum=-(2 ** 63)),
        color=_env_bool(env, "TYPESKIN_COLOR", True),
        width=_env_int(env, "TYPESKIN_WIDTH", 60, minimum=20),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the active settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(**overrides) -> Settings:
    """Replace selected settings. Returns the new active Settings.

    Usage:
        typeskin.configure(static_attempts=64, color=False)
    """
    global _settings
    _settings = replace(get_settings(), **overrides)
    if "seed" in overrides:
        from .sampling import reseed
        reseed(_settings.seed)
    return _settings
