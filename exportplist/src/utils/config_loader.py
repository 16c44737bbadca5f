import os
from pathlib import Path
import toml
from typing import Dict, Any, Optional


def get_config_path() -> Path:
    """Return the path to the configuration file."""
    env_config = os.environ.get("EXPORTPLIST_CONFIG")
    if env_config:
        return Path(env_config)
    return Path.home() / ".exportplist" / "config.toml"


def load_config() -> Dict[str, Any]:
    """Load configuration from TOML file."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except Exception as e:
        raise ValueError(f"Failed to load config: {e}")


def get_decoder_backend() -> Optional[str]:
    """Get the profile decoder backend from environment or config."""
    # Check environment variable first
    env_backend = os.environ.get("EXPORTPLIST_DECODER")
    if env_backend:
        return env_backend

    # Fall back to config
    config = load_config()
    decoder_config = config.get("decoder", {})
    return decoder_config.get("backend")
