import logging
from pathlib import Path
from typing import Dict, Optional

CONFIG_DIR = Path.home() / ".netwarden"
CONFIG_FILE = CONFIG_DIR / "config"

LOG_LEVEL_KEY = "NETWARDEN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _read_config() -> Dict[str, str]:
    config = {}
    if not CONFIG_FILE.exists():
        return config
    
    try:
        with open(CONFIG_FILE, "r") as f:
            for line in f:
                line = line.strip()
                if "=" in line:
                    key, value = line.split("=", 1)
                    config[key] = value
    except (IOError, PermissionError, OSError):
        # if we can't read the file, treat as not configured
        return {}
    return config

def get_config_value(key: str) -> Optional[str]:
    """get a value from the config file, None if not configured."""
    return _read_config().get(key)

def set_config_value(key: str, value: str):
    """set a value in the config file, preserving other config values."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    
    config = _read_config()
    config[key] = value
    
    try:
        with open(CONFIG_FILE, "w") as f:
            for k, v in config.items():
                f.write(f"{k}={v}\n")
    except (IOError, PermissionError, OSError) as e:
        raise RuntimeError(f"failed to write config file: {e}") from e

def get_profiles_file() -> Path:
    return CONFIG_DIR / "profiles.json"

def get_log_dir() -> Path:
    return CONFIG_DIR / "logs"

def get_log_level() -> str:
    """get the configured log level name, falling back to the default if unset or unknown."""
    level = (get_config_value(LOG_LEVEL_KEY) or DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName maps known names to their number
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level
