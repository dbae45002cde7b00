"""
Configuration storage for Minecraft Names MCP.

Setting lookup order:
1. Environment variable (MINECRAFT_NAMES_DELAY, MINECRAFT_NAMES_TIMEOUT,
   MINECRAFT_NAMES_RELAYS)
2. Config file (config.json in the user config directory)
3. Built-in default
"""

import json
import logging
import os
from pathlib import Path

from .endpoints import DEFAULT_RELAYS, is_relay_supported

logger = logging.getLogger(__name__)

DEFAULT_PACING_DELAY = 0.5
DEFAULT_REQUEST_TIMEOUT = 8.0

# setting key -> environment variable
ENV_VARS = {
    "pacing_delay": "MINECRAFT_NAMES_DELAY",
    "request_timeout": "MINECRAFT_NAMES_TIMEOUT",
    "relays": "MINECRAFT_NAMES_RELAYS",
}


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'minecraft-names-mcp'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config() -> dict:
    """Load the config file, returning {} if missing or invalid."""
    try:
        config_file = get_config_file()
        if config_file.exists():
            config = json.loads(config_file.read_text())
            if isinstance(config, dict):
                return config
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def save_config(values: dict) -> bool:
    """Merge values into the config file. Returns True on success."""
    try:
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        config = load_config()
        config.update({k: v for k, v in values.items() if v is not None})
        get_config_file().write_text(json.dumps(config, indent=2))
        return True
    except OSError:
        return False


def _non_negative_float(value) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number < 0:
        return None
    return number


def _get_float(key: str, default: float) -> float:
    env_value = os.environ.get(ENV_VARS[key])
    if env_value:
        if (number := _non_negative_float(env_value)) is not None:
            return number
        logger.warning("Ignoring invalid %s=%r", ENV_VARS[key], env_value)

    config_value = load_config().get(key)
    if config_value is not None:
        if (number := _non_negative_float(config_value)) is not None:
            return number
        logger.warning("Ignoring invalid %s in %s", key, get_config_file())

    return default


def get_pacing_delay() -> float:
    """Seconds to wait between nicks in a batch."""
    return _get_float("pacing_delay", DEFAULT_PACING_DELAY)


def get_request_timeout() -> float:
    """Per-request timeout in seconds."""
    timeout = _get_float("request_timeout", DEFAULT_REQUEST_TIMEOUT)
    return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT


def _clean_relays(names: list[str]) -> list[str]:
    relays = []
    for name in names:
        name = name.strip().lower()
        if not name:
            continue
        if not is_relay_supported(name):
            logger.warning("Ignoring unknown relay '%s'", name)
            continue
        if name not in relays:
            relays.append(name)
    return relays


def get_relay_names() -> list[str]:
    """
    Get the relay fallback order.

    An explicitly empty value (e.g. MINECRAFT_NAMES_RELAYS=",") means
    Mojang only, with no relays.
    """
    env_value = os.environ.get(ENV_VARS["relays"])
    if env_value is not None and env_value.strip():
        return _clean_relays(env_value.split(","))

    config_value = load_config().get("relays")
    if isinstance(config_value, list):
        return _clean_relays([str(v) for v in config_value])
    if isinstance(config_value, str):
        return _clean_relays(config_value.split(","))

    return list(DEFAULT_RELAYS)


def get_setting_source(key: str) -> str:
    """Determine where a setting comes from (for display purposes)."""
    env_var = ENV_VARS.get(key)
    if env_var and os.environ.get(env_var, "").strip():
        return "environment variable"

    if load_config().get(key) is not None:
        return "config file"

    return "default"
