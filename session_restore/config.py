"""Configuration loader for command resolution.

Reads FindOptions from a JSON file:

    {
      "min_wm_class_similarity": 0.8,
      "min_partial_match_confidence": 0.6,
      "capabilities": ["proc-fs-search"]
    }
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from xdg import BaseDirectory

from .models import FindOptions

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "gnome-session-restore"
CONFIG_FILE_NAME = "config.json"


def default_config_path() -> Path:
    """$XDG_CONFIG_HOME/gnome-session-restore/config.json"""
    return Path(BaseDirectory.xdg_config_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_find_options(config_file: Optional[Path] = None) -> FindOptions:
    """Load resolution options from JSON file.

    Args:
        config_file: Path to config.json (default: XDG config location)

    Returns:
        FindOptions; defaults if the file is missing or invalid
    """
    if config_file is None:
        config_file = default_config_path()

    if not config_file.exists():
        logger.info(f"Config file not found: {config_file}, using defaults")
        return FindOptions()

    try:
        with open(config_file) as f:
            data = json.load(f)
        options = FindOptions.model_validate(data)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read config from {config_file}: {e}")
        return FindOptions()
    except ValidationError as e:
        logger.error(f"Invalid config in {config_file}: {e}")
        return FindOptions()

    logger.debug(f"Loaded find options from {config_file}: {options}")
    return options
