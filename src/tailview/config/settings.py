import os
import logging
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_SEARCH_PATHS = [
    "config.yaml",
    os.path.expanduser("~/.config/tailview/config.yaml"),
    "/etc/tailview/config.yaml",
]


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


SETTINGS = (
    "interface",
    "sysfs_net_dir",
    "ip_command",
    "tailscale_command",
    "command_timeout",
    "poll_interval",
    "cors_origins",
)


class Config:
    interface = os.getenv("TAILVIEW_INTERFACE", "tailscale0")
    sysfs_net_dir = os.getenv("TAILVIEW_SYSFS_NET_DIR", "/sys/class/net")
    ip_command = os.getenv("TAILVIEW_IP_COMMAND", "/sbin/ip")
    tailscale_command = os.getenv("TAILVIEW_TAILSCALE_COMMAND", "tailscale")
    command_timeout = float(os.getenv("TAILVIEW_COMMAND_TIMEOUT", "10"))
    poll_interval = int(os.getenv("TAILVIEW_POLL_INTERVAL", "5"))
    cors_origins = _split_origins(os.getenv("TAILVIEW_CORS_ORIGINS", "http://localhost:3000"))

    def update(self, values: dict):
        """Override settings from a mapping (e.g. a parsed YAML file)."""
        for key, value in values.items():
            if key not in SETTINGS:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            if key == "cors_origins" and isinstance(value, str):
                value = _split_origins(value)
            elif key == "command_timeout":
                value = float(value)
            elif key == "poll_interval":
                value = int(value)
            setattr(self, key, value)


def find_config_file(path: Optional[str] = None) -> Optional[str]:
    if path:
        return path
    for candidate in CONFIG_SEARCH_PATHS:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config_file(path: Optional[str] = None) -> Optional[str]:
    """
    Apply a YAML config file on top of the environment defaults.
    Returns the path that was loaded, or None when no file was found.
    """
    config_path = find_config_file(path)
    if not config_path:
        return None

    with open(config_path, "r") as f:
        values = yaml.safe_load(f) or {}

    if not isinstance(values, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config.update(values)
    logger.info(f"Loaded configuration from {config_path}")
    return config_path


config = Config()
