"""Utils module - Configuration and helper functions."""

from funcrouter_core.utils.config import (
    Config,
    ConfigSource,
    configure_logging,
    load_config,
)
from funcrouter_core.utils.helpers import (
    env,
    merge_headers,
    parse_query,
    pipe,
    to_namespace,
)

__all__ = [
    "Config",
    "ConfigSource",
    "configure_logging",
    "load_config",
    "env",
    "merge_headers",
    "parse_query",
    "pipe",
    "to_namespace",
]
