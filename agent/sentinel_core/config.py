"""
Paths, logging setup, runtime env loading, Config, safe_print.
"""

import os
import sys
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from dotenv import load_dotenv

from .constants import (
    DEFAULT_API_KEY_NAME, DEFAULT_API_KEY_VALUE, DEFAULT_BUFFER_SIZE_LIMIT,
    DEFAULT_IDLE_TIMEOUT, DEFAULT_LOCK_ENABLED, DEFAULT_LOCK_THRESHOLD,
    DEFAULT_LOCK_UTILITY, DEFAULT_METADATA_QUERY_INTERVAL,
    DEFAULT_STATUS_BASE_URL, DEFAULT_STATUS_INTERVAL, DEFAULT_SUBMIT_URL,
    DEFAULT_USER_ID,
)


# ─── Paths ───────────────────────────────────────────────────────
# One state dir per user. Created lazily by setup_logging().
_FOLDER_NAME = "x11-sentinel"


def _base_dir():
    override = os.environ.get("SENTINEL_HOME")
    if override:
        return Path(override)
    state_home = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(state_home) / _FOLDER_NAME


BASE_DIR = _base_dir()
LOG_FILE = BASE_DIR / "sentinel.log"


# ─── Errors ──────────────────────────────────────────────────────

class ConfigError(ValueError):
    """Invalid runtime configuration. Fatal at startup."""


# ─── Safe print (no crash when detached from a terminal) ─────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger("sentinel")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file=None, level=logging.INFO):
    """Attach file + console handlers to the sentinel logger. Idempotent."""
    log_file = Path(log_file) if log_file else LOG_FILE
    if log.handlers:
        return log

    log_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        if log_file.exists() and log_file.stat().st_size > 1_000_000:
            log_file.write_text("")
    except OSError:
        pass

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setFormatter(formatter)
    log.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    log.setLevel(level)
    log.propagate = False
    return log


# ─── Runtime env file ────────────────────────────────────────────

def load_runtime_env(environ=None):
    """
    Load `env.<RUNTIME_ENV>` from the working directory if RUNTIME_ENV is set.
    Variables already present in the environment are not overridden.
    Returns the path that was loaded, or None.
    """
    environ = os.environ if environ is None else environ
    runtime_env = environ.get("RUNTIME_ENV")
    if not runtime_env:
        return None
    path = Path.cwd() / f"env.{runtime_env}"
    if not path.is_file():
        log.warning("RUNTIME_ENV=%s but %s does not exist", runtime_env, path)
        return None
    load_dotenv(dotenv_path=path, override=False)
    return path


# ─── Config ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Config:
    """Immutable runtime parameters. Shared read-only across threads."""

    api_key_name: str = DEFAULT_API_KEY_NAME
    api_key_value: str = DEFAULT_API_KEY_VALUE
    buffer_size_limit: int = DEFAULT_BUFFER_SIZE_LIMIT
    idle_timeout: int = DEFAULT_IDLE_TIMEOUT
    lock_enabled: bool = DEFAULT_LOCK_ENABLED
    lock_threshold: float = DEFAULT_LOCK_THRESHOLD
    lock_utility: str = DEFAULT_LOCK_UTILITY
    metadata_query_interval: int = DEFAULT_METADATA_QUERY_INTERVAL
    status_base_url: str = DEFAULT_STATUS_BASE_URL
    status_interval: int = DEFAULT_STATUS_INTERVAL
    submit_url: str = DEFAULT_SUBMIT_URL
    user_id: str = DEFAULT_USER_ID

    def __post_init__(self):
        if self.buffer_size_limit < 1:
            raise ConfigError(f"buffer_size_limit must be >= 1, got {self.buffer_size_limit}")
        for name in ("idle_timeout", "metadata_query_interval", "status_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")

    @property
    def credential_header(self):
        return {self.api_key_name: self.api_key_value}


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _parse_bool(raw):
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


_PARSERS = {
    bool: _parse_bool,
    int: lambda raw: int(raw.strip()),
    float: lambda raw: float(raw.strip()),
    str: str,
}


def env_var_name(field_name):
    return "APP_" + field_name.upper()


def load_config(overrides=None, environ=None):
    """
    Build the Config. Per field: explicit override > APP_<FIELD> env var > default.
    Unparseable env values fall back to the default.
    """
    environ = os.environ if environ is None else environ
    overrides = overrides or {}
    values = {}

    for f in fields(Config):
        if overrides.get(f.name) is not None:
            values[f.name] = overrides[f.name]
            continue

        raw = environ.get(env_var_name(f.name))
        if raw is None:
            continue

        parser = _PARSERS[f.type]
        try:
            values[f.name] = parser(raw)
        except ValueError:
            log.warning("Ignoring unparseable %s=%r, using default %r",
                        env_var_name(f.name), raw, f.default)

    return Config(**values)
