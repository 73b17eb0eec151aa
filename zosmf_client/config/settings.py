"""
Configuration management for the z/OSMF client.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.

Credentials are not read from this file; connections are always built by
the caller through ZosConnectionFactory.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import yaml

from zosmf_client.exceptions import InvalidConfigurationError
from zosmf_client.logging_config import get_logger

logger = get_logger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${ZOSMF_TSO_ACCOUNT}" -> value of ZOSMF_TSO_ACCOUNT env var
        "${ZOSMF_TSO_PROC:IZUFPROC}" -> value of ZOSMF_TSO_PROC or "IZUFPROC" if not set
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class RequestConfig:
    """Transport settings applied to every outbound call."""

    timeout: float = 30
    verify: Union[bool, str] = True  # bool or path to a CA bundle


@dataclass
class TsoConfig:
    """Defaults for TSO address space sessions."""

    account: str = ""
    proc: str = "IZUFPROC"
    charset: str = "697"
    codepage: str = "1047"
    rows: int = 24
    cols: int = 80
    region_size: int = 4096
    max_poll_attempts: int = 10
    poll_interval: float = 0.0  # seconds between polls


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class ZosmfConfig:
    """Main z/OSMF client configuration."""

    request: RequestConfig = field(default_factory=RequestConfig)
    tso: TsoConfig = field(default_factory=TsoConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.zosmf/config.yaml")


def get_default_config() -> ZosmfConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        ZosmfConfig: Default configuration object
    """
    return ZosmfConfig()


def load_config(config_path: Optional[str] = None) -> ZosmfConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        ZosmfConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise
    except (TypeError, ValueError, AttributeError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _to_bool(value: Any) -> Any:
    # Env var substitution yields strings
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _build_config_from_dict(config_data: Dict[str, Any]) -> ZosmfConfig:
    """
    Build ZosmfConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        ZosmfConfig: Configuration object
    """
    default_config = get_default_config()

    request_data = _section(config_data, 'request')
    request = RequestConfig(
        timeout=float(request_data.get('timeout', default_config.request.timeout)),
        verify=_to_bool(request_data.get('verify', default_config.request.verify)),
    )

    tso_data = _section(config_data, 'tso')
    tso = TsoConfig(
        account=str(tso_data.get('account', default_config.tso.account)),
        proc=str(tso_data.get('proc', default_config.tso.proc)),
        charset=str(tso_data.get('charset', default_config.tso.charset)),
        codepage=str(tso_data.get('codepage', default_config.tso.codepage)),
        rows=int(tso_data.get('rows', default_config.tso.rows)),
        cols=int(tso_data.get('cols', default_config.tso.cols)),
        region_size=int(tso_data.get('region_size', default_config.tso.region_size)),
        max_poll_attempts=int(
            tso_data.get('max_poll_attempts', default_config.tso.max_poll_attempts)
        ),
        poll_interval=float(tso_data.get('poll_interval', default_config.tso.poll_interval)),
    )

    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=str(logging_data.get('level', default_config.logging.level)),
        file=os.path.expanduser(str(logging_data.get('file', default_config.logging.file))),
        json_format=_to_bool(logging_data.get('json_format', default_config.logging.json_format)),
    )

    return ZosmfConfig(request=request, tso=tso, logging=logging)


def _validate_config(config: ZosmfConfig) -> None:
    """
    Validate configuration values.

    Raises:
        InvalidConfigurationError: If any value is out of range
    """
    if config.request.timeout <= 0:
        raise InvalidConfigurationError(
            f"request.timeout must be positive, got {config.request.timeout}"
        )
    if not isinstance(config.request.verify, (bool, str)):
        raise InvalidConfigurationError("request.verify must be a boolean or a CA bundle path")

    for name in ("rows", "cols", "region_size", "max_poll_attempts"):
        value = getattr(config.tso, name)
        if value < 1:
            raise InvalidConfigurationError(f"tso.{name} must be at least 1, got {value}")
    if config.tso.poll_interval < 0:
        raise InvalidConfigurationError(
            f"tso.poll_interval must not be negative, got {config.tso.poll_interval}"
        )
    if not config.tso.proc.strip():
        raise InvalidConfigurationError("tso.proc must not be empty")

    if config.logging.level.upper() not in _VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging.level must be one of {sorted(_VALID_LOG_LEVELS)}, got {config.logging.level}"
        )
    if not isinstance(config.logging.json_format, bool):
        raise InvalidConfigurationError("logging.json_format must be a boolean")
