# cpsclient/utils/config_loader.py
"""
CPS Client Configuration Loader with Pydantic Validation

This module loads and validates configuration from a YAML file using Pydantic.
All required values are checked at load time so that a misconfigured client
fails before its first request rather than in the middle of one.

Key Design Decisions:
- Pydantic models mirror the exact structure of config.yaml
- Passwords use SecretStr so they never show up in logs or reprs
- Log levels accept both names ("DEBUG") and numeric values (10)
- Certificate verification is on unless explicitly disabled
"""

import logging
from pathlib import Path
from typing import Any, Literal, cast

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from cpsclient.models import Language

logger: logging.Logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases
# =============================================================================

LogLevelName = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_API_VERSION: str = '1.8.12'

# =============================================================================
# Configuration Models (Schema)
# =============================================================================


class ApiSection(BaseModel):
    """
    Schema for the 'api' section of config.yaml.

    Endpoint and the credential triple (customer id, user, password) sent in
    the <auth> block of every request.
    """

    model_config = ConfigDict(extra='forbid')

    endpoint_url: HttpUrl = Field(
        ...,
        description='Full URL of the CPS XML API endpoint.',
    )

    customer_id: str = Field(
        ...,
        min_length=1,
        description='Customer ID (cid) issued by CPS.',
    )

    user: str = Field(
        ...,
        min_length=1,
        description='API user name.',
    )

    password: SecretStr = Field(
        ...,
        description='API password. Stored as SecretStr to prevent accidental exposure.',
    )

    @field_validator('password')
    @classmethod
    def password_not_empty(cls, v: SecretStr) -> SecretStr:
        """Ensure the password is not an empty string."""
        if not v.get_secret_value():
            raise ValueError('Password cannot be empty')
        return v


class ClientSection(BaseModel):
    """
    Schema for the 'client' section of config.yaml.

    HTTP behavior and request defaults.
    """

    model_config = ConfigDict(extra='forbid')

    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description='HTTP timeout in seconds, applied to both connect and read.',
    )

    verify_ssl: bool = Field(
        default=True,
        description='Whether to verify TLS certificates. Only disable this '
        'deliberately, e.g. against a test endpoint with a self-signed certificate.',
    )

    default_lang: Language = Field(
        default='en',
        description='Language of result messages when a call does not specify one.',
    )

    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description='API version sent in the <version> element of every request.',
    )


class LoggingSection(BaseModel):
    """
    Schema for the 'logging' section of config.yaml.

    Console logging is always enabled; file logging is optional and is
    enabled by setting file_path.
    """

    model_config = ConfigDict(extra='forbid')

    console_level: LogLevelName | int = Field(
        default='INFO',
        description='Logging level for console output (name or number).',
    )

    file_path: Path | None = Field(
        default=None,
        description='Optional path to a log file.',
    )

    file_level: LogLevelName | int | None = Field(
        default=None,
        description='Logging level for file output. Only relevant if file_path is set.',
    )

    @field_validator('console_level', 'file_level')
    @classmethod
    def validate_log_level(
        cls, v: LogLevelName | int | None
    ) -> LogLevelName | int | None:
        """Accept level names as-is; numeric levels must be a standard level."""
        if v is None or isinstance(v, str):
            return v

        valid_levels: set[int] = {10, 20, 30, 40, 50}
        if v not in valid_levels:
            raise ValueError(
                f'Numeric log level must be one of {valid_levels}, got {v}'
            )
        return v

    @model_validator(mode='after')
    def validate_file_logging_consistency(self) -> 'LoggingSection':
        """
        file_path without file_level defaults the level to DEBUG;
        file_level without file_path is an error.
        """
        has_file_path: bool = self.file_path is not None
        has_file_level: bool = self.file_level is not None

        if has_file_path and not has_file_level:
            self.file_level = 'DEBUG'
            logger.warning(
                'file_path provided without file_level. Defaulting to DEBUG for file logging.'
            )

        if has_file_level and not has_file_path:
            raise ValueError(
                'file_level is specified but file_path is missing. '
                'Both must be provided to enable file logging.'
            )

        return self

    def get_console_level_int(self) -> int:
        if isinstance(self.console_level, int):
            return self.console_level
        return cast(int, getattr(logging, self.console_level))

    def get_file_level_int(self) -> int | None:
        if self.file_level is None:
            return None
        if isinstance(self.file_level, int):
            return self.file_level
        return cast(int, getattr(logging, self.file_level))


class CpsConfig(BaseModel):
    """
    Root configuration model.

    Usage:
        config = load_config()
        endpoint = config.api.endpoint_url
        timeout = config.client.request_timeout
    """

    model_config = ConfigDict(extra='forbid')

    api: ApiSection
    client: ClientSection = Field(default_factory=ClientSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)


# =============================================================================
# Loader Logic
# =============================================================================


def _get_default_config_path() -> Path:
    """
    Resolve the default config.yaml location.

    The file lives next to the shipped example, inside the package:

        cpsclient/
        ├── config/
        │   ├── config.example.yaml
        │   └── config.yaml        <-- Target file
        └── utils/
            └── config_loader.py   <-- This file
    """
    package_root: Path = Path(__file__).resolve().parent.parent
    return package_root / 'config' / 'config.yaml'


def load_config(config_path: Path | str | None = None) -> CpsConfig:
    """
    Load, parse, and validate the configuration file.

    Args:
        config_path: Optional explicit path to a config file. If None, the
                     default location from _get_default_config_path() is used.

    Returns:
        A fully validated CpsConfig.

    Raises:
        FileNotFoundError: The config file does not exist.
        yaml.YAMLError: The file is not valid YAML.
        ValidationError: The YAML is valid but the configuration is not.

    Example:
        config = load_config('/etc/cpsclient/config.yaml')
        api_url = config.api.endpoint_url
    """
    if config_path:
        path_obj: Path = Path(config_path)
    else:
        path_obj = _get_default_config_path()

    logger.debug('Resolving configuration from: %s', path_obj)

    if not path_obj.exists():
        error_msg: str = f'Configuration file not found at: {path_obj}'
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(path_obj, encoding='utf-8') as f:
            raw_config: dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error('Failed to parse YAML config file: %s', e)
        raise

    try:
        config = CpsConfig(**raw_config)
        logger.debug('Configuration validated successfully.')
        return config
    except ValidationError as e:
        logger.error('Configuration validation failed: %s', e)
        raise
