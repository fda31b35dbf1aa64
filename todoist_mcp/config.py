"""
todoist-mcp shared configuration, constants, and module-level state.
Standalone module: no imports from other project files.
"""

import os
import tempfile

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys that may also come from the process environment (containers, MCP hosts).
KNOWN_ENV_KEYS = (
    "TODOIST_API_TOKEN",
    "TODOIST_API_BASE_URL",
    "TODOIST_PAGE_SIZE",
    "TODOIST_HTTP_TIMEOUT_SECONDS",
    "TODOIST_HTTP_MAX_RESPONSE_BYTES",
    "TODOIST_HTTP_LOG",
    "TODOIST_HTTP_LOG_SAMPLE_RATE",
    "TODOIST_MCP_RESPONSE_MODE",
)


def load_env():
    """Read KEY=value pairs from .env, then fill known keys from os.environ.

    Values in the file take precedence over the environment.
    """
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if key not in env and os.environ.get(key):
            env[key] = os.environ[key]
    return env


def save_env_value(key, value):
    """Update or add a key in the .env file (atomic write-then-rename)."""
    lines = []
    found = False
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            lines = f.readlines()
    for i, line in enumerate(lines):
        if line.strip().startswith(f"{key}="):
            lines[i] = f"{key}={value}\n"
            found = True
            break
    if not found:
        lines.append(f"{key}={value}\n")
    env_dir = os.path.dirname(ENV_PATH) or "."
    fd, tmp_path = tempfile.mkstemp(dir=env_dir, prefix=".env_tmp_")
    try:
        with os.fdopen(fd, "w") as f:
            f.writelines(lines)
        os.replace(tmp_path, ENV_PATH)
    except Exception:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    # Owner-only on Unix/Mac. No-op on Windows.
    try:
        os.chmod(ENV_PATH, 0o600)
    except (OSError, NotImplementedError):
        pass


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


def _env_choice(key, choices, default):
    raw = (env.get(key) or "").strip().lower()
    return raw if raw in choices else default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"
CONTRACT_SCHEMA_VERSION = "1.0"

DEFAULT_BASE_URL = "https://api.todoist.com/api/v1"
MAX_PAGE_SIZE = 200

VALID_RESPONSE_MODES = {"legacy", "envelope"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env / environment)
# ---------------------------------------------------------------------------

env = load_env()

API_TOKEN = env.get("TODOIST_API_TOKEN", "")
BASE_URL = (env.get("TODOIST_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
PAGE_SIZE = min(MAX_PAGE_SIZE, max(1, _env_int("TODOIST_PAGE_SIZE", 50)))
HTTP_TIMEOUT_SECONDS = _env_float("TODOIST_HTTP_TIMEOUT_SECONDS", 30.0)
HTTP_MAX_RESPONSE_BYTES = _env_int("TODOIST_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TODOIST_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("TODOIST_HTTP_LOG_SAMPLE_RATE", 1.0)))
MCP_RESPONSE_MODE = _env_choice("TODOIST_MCP_RESPONSE_MODE", VALID_RESPONSE_MODES, "legacy")
