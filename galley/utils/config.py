"""
Configuration loading for the editor core.

Packaged defaults live in galley/config/defaults.yaml. A deployment can
override any subset of them with a YAML file named by GALLEY_CONFIG_PATH
(read from the environment or a .env file).

Examples:
    >>> config = load_config()
    >>> config["history"]["debounce_ms"]
    500
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


def load_config(override_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load packaged defaults merged with an optional override file.

    Args:
        override_path: YAML file whose keys override the defaults
            (defaults to GALLEY_CONFIG_PATH env variable, if set)

    Returns:
        Plain nested dict of configuration values
    """
    if override_path is None and os.getenv("GALLEY_CONFIG_PATH"):
        override_path = Path(os.getenv("GALLEY_CONFIG_PATH"))

    config = OmegaConf.load(DEFAULTS_PATH)
    if override_path is not None:
        config = OmegaConf.merge(config, OmegaConf.load(override_path))

    return OmegaConf.to_container(config, resolve=True)


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Process-wide configuration, loaded once."""
    return load_config()
