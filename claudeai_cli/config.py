"""
claudeai-cli shared configuration and constants.
Standalone module: no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys read from os.environ when the .env file does not set them.
KNOWN_ENV_KEYS = (
    "CLAUDEAI_SESSION_KEY",
    "CLAUDEAI_BASE_URL",
    "CLAUDEAI_MODEL",
    "CLAUDEAI_TIMEZONE",
    "CLAUDEAI_HTTP_TIMEOUT_SECONDS",
    "CLAUDEAI_HTTP_MAX_RESPONSE_BYTES",
    "CLAUDEAI_HTTP_LOG",
    "CLAUDEAI_LOG_LEVEL",
    "CLAUDEAI_MCP_RESPONSE_MODE",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if key not in env and key in os.environ:
            env[key] = os.environ[key]
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _local_timezone_name():
    """Best-effort IANA name of the host timezone, or UTC."""
    tz = os.environ.get("TZ", "").lstrip(":")
    if tz and "/" in tz:
        return tz
    try:
        target = os.path.realpath("/etc/localtime")
    except OSError:
        return "UTC"
    marker = "zoneinfo" + os.sep
    if marker in target:
        return target.split(marker, 1)[1]
    return "UTC"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"

DEFAULT_BASE_URL = "https://claude.ai/api"
DEFAULT_MODEL = "claude-2.1"
SESSION_COOKIE_NAME = "sessionKey"

CONTRACT_SCHEMA_VERSION = "1.0"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}

# ---------------------------------------------------------------------------
# Module-level settings (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

SESSION_KEY = env.get("CLAUDEAI_SESSION_KEY", "")
BASE_URL = env.get("CLAUDEAI_BASE_URL", "") or DEFAULT_BASE_URL
MODEL = env.get("CLAUDEAI_MODEL", "") or DEFAULT_MODEL
TIMEZONE = env.get("CLAUDEAI_TIMEZONE", "") or _local_timezone_name()
# None means block until the transport resolves or fails.
HTTP_TIMEOUT_SECONDS = _env_float("CLAUDEAI_HTTP_TIMEOUT_SECONDS", None)
HTTP_MAX_RESPONSE_BYTES = _env_int("CLAUDEAI_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("CLAUDEAI_HTTP_LOG", False)
LOG_LEVEL = env.get("CLAUDEAI_LOG_LEVEL", "WARNING").upper()
if LOG_LEVEL not in VALID_LOG_LEVELS:
    LOG_LEVEL = "WARNING"
MCP_RESPONSE_MODE = env.get("CLAUDEAI_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in {"legacy", "envelope"}:
    MCP_RESPONSE_MODE = "legacy"

# ---------------------------------------------------------------------------
# Runtime flags (set by cli.main)
# ---------------------------------------------------------------------------

RUNTIME_DRY_RUN = False
RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
