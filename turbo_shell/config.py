# turbo_shell/config.py
# Description: Configuration management for the turbo shell.
#
# Imports
import copy
import os
import sys
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
#
# Third-Party Imports
import httpx
from loguru import logger
#
# Local Imports
from .Constants import BUNDLED_PATH_CONFIGURATION, SOURCE_BUNDLED, SOURCE_SERVER
#
#######################################################################################################################
#
# Functions:

# --- Path to the shell's configuration file ---
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "turbo_shell" / "config.toml"

# Environment variables that override the file
ENVIRONMENT_ENV_VAR = "TURBO_ENVIRONMENT"
BASE_URL_ENV_VAR = "TURBO_URL"

CONFIG_TOML_CONTENT = """
# Configuration for turbo-shell
# This file is created on first run. Edit it to point the shell at your backend.

[general]
app_name = "Turbo Shell"
# Selects one of the base URLs in [urls]. Overridden by TURBO_ENVIRONMENT.
environment = "development"

[urls]
# Base URL of the Turbo backend for each environment. TURBO_URL overrides the selected one.
development = "http://localhost:3000"
production = "https://example.com"

[path_configuration]
# Sources are concatenated in this order. Later rules win on key collisions.
sources = ["server", "bundled"]
server_path = "/turbo.json"
# Leave empty to use the rules bundled with the shell.
bundled_file = ""
fetch_timeout = 10.0

[session]
user_agent = "turbo-shell"
connect_timeout = 10.0
read_timeout = 30.0
max_connections = 10
max_keepalive_connections = 5

[logging]
log_level = "INFO"
log_file = "~/.local/share/turbo_shell/logs/turbo_shell.log"
log_rotation = "10 MB"
log_retention = "7 days"
# Writing to stderr draws over the TUI; only enable it when running headless.
console = false
"""

DEFAULT_CONFIG_FROM_TOML = tomllib.loads(CONFIG_TOML_CONTENT)

_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merges update_dict into base_dict."""
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _get_typed_value(data_dict: Dict, key: str, default: Any, target_type: type = str) -> Any:
    """Helper to get value from dict and cast to type, with logging for type errors."""
    value = data_dict.get(key, default)
    if value is default:
        return value
    if value is None:
        return None

    try:
        if target_type == bool:
            if isinstance(value, bool):
                return value
            return str(value).lower() in ['true', '1', 't', 'y', 'yes']
        if target_type == Path:
            return Path(value).expanduser() if value else default
        return target_type(value)
    except (ValueError, TypeError) as e:
        logger.warning(f"Config key '{key}' has value '{value}' which could not be converted to {target_type}. Using default: '{default}'. Error: {e}")
        return default


def load_cli_config_and_ensure_existence(force_reload: bool = False) -> Dict[str, Any]:
    """
    Loads settings from ~/.config/turbo_shell/config.toml.
    If the file doesn't exist, it's created with default values from CONFIG_TOML_CONTENT.
    Uses programmatic defaults (from CONFIG_TOML_CONTENT) as a base.
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload:
        return _CONFIG_CACHE

    loaded_config = copy.deepcopy(DEFAULT_CONFIG_FROM_TOML)

    if not DEFAULT_CONFIG_PATH.exists():
        logger.info(f"Config file not found at {DEFAULT_CONFIG_PATH}. Creating with default values.")
        try:
            DEFAULT_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            with open(DEFAULT_CONFIG_PATH, "w", encoding="utf-8") as f:
                f.write(CONFIG_TOML_CONTENT)
            logger.info(f"Created default config file at {DEFAULT_CONFIG_PATH}")
        except OSError as e:
            logger.error(f"Could not create default config file {DEFAULT_CONFIG_PATH}: {e}. Using internal defaults.")
    else:
        logger.info(f"Attempting to load config from: {DEFAULT_CONFIG_PATH}")
        try:
            with open(DEFAULT_CONFIG_PATH, "rb") as f:
                user_config_from_file = tomllib.load(f)
            loaded_config = deep_merge_dicts(loaded_config, user_config_from_file)
            logger.info(f"Successfully loaded and merged config from {DEFAULT_CONFIG_PATH}")
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML config file {DEFAULT_CONFIG_PATH}: {e}. Using internal defaults.")
        except OSError as e:
            logger.error(f"Could not read config file {DEFAULT_CONFIG_PATH}: {e}. Using internal defaults.")

    _CONFIG_CACHE = loaded_config
    logger.debug(f"load_cli_config_and_ensure_existence returning config with top-level keys: {list(loaded_config.keys())}")
    return _CONFIG_CACHE


def get_cli_setting(section: str, key: str, default: Any = None) -> Any:
    """Helper to get a specific setting from the loaded configuration."""
    config = load_cli_config_and_ensure_existence()
    section_data = config.get(section)
    if isinstance(section_data, dict):
        return section_data.get(key, default)
    return default


def get_environment() -> str:
    """Name of the backend environment, TURBO_ENVIRONMENT first."""
    return os.getenv(ENVIRONMENT_ENV_VAR) or get_cli_setting("general", "environment", "development")


def get_base_url() -> str:
    """
    Base URL of the Turbo backend.

    Raises:
        KeyError: If the selected environment has no URL configured and TURBO_URL is unset.
    """
    override = os.getenv(BASE_URL_ENV_VAR)
    if override:
        return override.rstrip("/")
    environment = get_environment()
    urls = load_cli_config_and_ensure_existence().get("urls", {})
    if environment not in urls:
        raise KeyError(f"No base URL configured for environment '{environment}'")
    return str(urls[environment]).rstrip("/")


def turbo_url(path: Optional[str] = "", base_url: Optional[str] = None) -> httpx.URL:
    """Absolute URL for a backend path."""
    base = base_url if base_url is not None else get_base_url()
    return httpx.URL(base.rstrip("/") + (path or ""))


def get_bundled_configuration_path() -> Path:
    """Bundled rules file, honouring [path_configuration].bundled_file."""
    configured = get_cli_setting("path_configuration", "bundled_file", "")
    if configured:
        return Path(configured).expanduser()
    return BUNDLED_PATH_CONFIGURATION


def get_path_configuration_source_order() -> List[str]:
    """Configured order of path configuration sources; unknown names are dropped."""
    order = get_cli_setting("path_configuration", "sources", [SOURCE_SERVER, SOURCE_BUNDLED])
    if not isinstance(order, list):
        logger.warning(f"[path_configuration].sources must be a list, got {order!r}. Using defaults.")
        return [SOURCE_SERVER, SOURCE_BUNDLED]
    known = [name for name in order if name in (SOURCE_SERVER, SOURCE_BUNDLED)]
    if len(known) != len(order):
        logger.warning(f"Ignoring unknown path configuration sources in {order!r}")
    return known


def get_session_timeout() -> httpx.Timeout:
    """Per-operation timeouts for content loads."""
    session_section = load_cli_config_and_ensure_existence().get("session", {})
    connect = _get_typed_value(session_section, "connect_timeout", 10.0, float)
    read = _get_typed_value(session_section, "read_timeout", 30.0, float)
    return httpx.Timeout(read, connect=connect)


def get_connection_limits() -> httpx.Limits:
    """Limits for the connection pool shared by both content sessions."""
    session_section = load_cli_config_and_ensure_existence().get("session", {})
    return httpx.Limits(
        max_connections=_get_typed_value(session_section, "max_connections", 10, int),
        max_keepalive_connections=_get_typed_value(session_section, "max_keepalive_connections", 5, int),
    )

#
# End of config.py
#######################################################################################################################
