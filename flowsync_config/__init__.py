"""
FlowSync firm configuration.

Usage::

    from flowsync_config import FirmConfig, load_config

    config = load_config()                  # packaged defaults.yaml
    config = load_config("firm.yaml")       # firm overrides
"""

from flowsync_config.loader import compute_checksum, load_config, parse_config
from flowsync_config.schema import FirmConfig

__all__ = [
    "FirmConfig",
    "compute_checksum",
    "load_config",
    "parse_config",
]
