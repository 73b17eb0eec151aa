"""
Configuration management for the z/OSMF client.

Handles loading and validation of configuration files.
"""

from zosmf_client.config.settings import (
    LoggingConfig,
    RequestConfig,
    TsoConfig,
    ZosmfConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "LoggingConfig",
    "RequestConfig",
    "TsoConfig",
    "ZosmfConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
