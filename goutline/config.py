"""
goutline.config — Environment settings and diagnostics.

Settings are read from the environment once per run; CLI flags override them.
Diagnostics go to stderr as tagged lines and only when debug mode is on, so
that stderr stays clean apart from the final ``error:`` line.
"""
import codecs
import io
import os
import sys
from dataclasses import dataclass

# ============================================================================
# CONSTANTS
# ============================================================================

ENV_DEBUG = "GOUTLINE_DEBUG"
ENV_JSON_INDENT = "GOUTLINE_JSON_INDENT"

TRUTHY = ("1", "true", "yes", "on")
LOG_TAG = "[goutline]"


# ============================================================================
# SETTINGS
# ============================================================================

@dataclass
class Settings:
    """Runtime settings for a single outline run."""
    debug: bool = False
    json_indent: int | None = None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in TRUTHY


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        print(f"{LOG_TAG} WARN: ignoring {name}={raw!r} (not an integer)", file=sys.stderr)
        return None
    return value if value >= 0 else None


def load_settings() -> Settings:
    """Build settings from GOUTLINE_* environment variables."""
    return Settings(
        debug=_env_flag(ENV_DEBUG),
        json_indent=_env_int(ENV_JSON_INDENT),
    )


# ============================================================================
# OUTPUT ENCODING
# ============================================================================

def _is_utf8(stream) -> bool:
    encoding = getattr(stream, "encoding", None)
    if not encoding:
        return False
    try:
        return codecs.lookup(encoding).name == "utf-8"
    except LookupError:
        return False


def utf8_io():
    """Force UTF-8 stdout/stderr (Windows cp1252, PYTHONIOENCODING=ascii). Call once at startup."""
    for name in ("stdout", "stderr"):
        stream = getattr(sys, name)
        if _is_utf8(stream):
            continue
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
        elif hasattr(stream, "buffer"):
            setattr(sys, name, io.TextIOWrapper(stream.buffer, encoding="utf-8"))


# ============================================================================
# DIAGNOSTICS
# ============================================================================

_debug_enabled = False


def set_debug(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = enabled


def debug_enabled() -> bool:
    return _debug_enabled


def log(message: str) -> None:
    """Write a tagged diagnostic line to stderr when debug mode is on."""
    if _debug_enabled:
        print(f"{LOG_TAG} {message}", file=sys.stderr)
