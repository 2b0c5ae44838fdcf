"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from salvo.core.placement import DEFAULT_PLACEMENT_ATTEMPTS

DEFAULT_AI_DELAY_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable runtime settings sourced from environment."""

    ai_delay_seconds: float = DEFAULT_AI_DELAY_SECONDS
    seed: int | None = None
    placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
    log_level: str = "INFO"
    log_format: str = "text"


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left-to-right; later files win.

    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env.app
    4) .env.app.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with app-prefixed override."""
    value = os.getenv("SALVO_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper() or default


def load_settings() -> GameSettings:
    """Load immutable game settings from env vars."""
    log_format = os.getenv("LOG_FORMAT", "text").strip().lower()
    return GameSettings(
        ai_delay_seconds=max(0.0, _float("SALVO_AI_DELAY_SECONDS", DEFAULT_AI_DELAY_SECONDS)),
        seed=_optional_int("SALVO_SEED"),
        placement_attempts=max(1, _int("SALVO_PLACEMENT_ATTEMPTS", DEFAULT_PLACEMENT_ATTEMPTS)),
        log_level=resolve_log_level_name(),
        log_format=log_format if log_format in {"text", "json"} else "text",
    )


def _int(name: str, default: int) -> int:
    value = _optional_int(name)
    return default if value is None else value


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate
    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[2]
    return project_root / path
