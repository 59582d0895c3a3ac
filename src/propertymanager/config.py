"""Configuration management for the property manager backend.

This module provides utilities for loading and validating configuration
from environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from propertymanager.common import Role
from propertymanager.users import AdminAccountConfig, PasswordHasher

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

LOGGER = logging.getLogger(__name__)

_DEFAULT_DATABASE_PATH = "./propertymanager.db"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def configure_logging(app_config: AppConfig) -> None:
    """Configure logging based on the application configuration.

    :param app_config: The application configuration instance
    """
    if not app_config.logging_level:
        logging.basicConfig(level=logging.INFO, force=True)
        return

    numeric_level = getattr(logging, app_config.logging_level.upper(), None)
    if not isinstance(numeric_level, int):
        LOGGER.warning("Invalid log level: %s, using INFO", app_config.logging_level)
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, force=True)


@dataclass
class AppConfig:
    """Holds application configuration loaded from environment variables."""

    database_path: str
    logging_level: str | None
    root_path: str

    bcrypt_rounds: int

    create_default_admin: bool
    admin_username: str
    admin_password: str
    admin_role: str

    def __post_init__(self) -> None:
        """Initialize derived configuration attributes."""
        self.admin_config = AdminAccountConfig(
            username=self.admin_username,
            password=self.admin_password,
            role=Role(self.admin_role),
        )
        self.password_hasher = PasswordHasher(rounds=self.bcrypt_rounds)


def get_env_str(
    var_name: str,
    default: str | None,
    value_checker: Callable[[str], bool] | None = None,
) -> str:
    """Get an environment variable as a string with optional constraints.

    :param var_name: Name of the environment variable
    :param default: Default value if the variable is not set
    :param value_checker: Optional function to validate the value
    :return: The environment variable value
    :raises ValueError: If the value does not meet the constraints
    """
    value = os.getenv(var_name, default)
    if value is None:
        msg = f"Environment variable {var_name} is required"
        raise ValueError(msg)

    if value_checker and not value_checker(value):
        msg = f"Environment variable {var_name} has invalid value: {value}"
        raise ValueError(msg)

    return value


def get_env_int(
    var_name: str,
    default: int,
    value_checker: Callable[[int], bool] | None = None,
) -> int:
    """Get an environment variable as an integer with optional constraints.

    :param var_name: Name of the environment variable
    :param default: Default value if the variable is not set
    :param value_checker: Optional function to validate the value
    :return: The environment variable value as an integer
    :raises ValueError: If the value does not meet the constraints or is not an integer
    """
    value_str = os.getenv(var_name)
    if value_str is None or value_str == "":
        return default

    try:
        value = int(value_str)
    except ValueError as e:
        msg = f"Environment variable {var_name} must be an integer, got: {value_str}"
        raise ValueError(msg) from e

    if value_checker and not value_checker(value):
        msg = f"Environment variable {var_name} has invalid value: {value}"
        raise ValueError(msg)

    return value


def get_env_bool(var_name: str, *, default: bool) -> bool:
    """Get an environment variable as a boolean.

    Accepts 1/0, true/false, yes/no and on/off, case-insensitively.

    :param var_name: Name of the environment variable
    :param default: Default value if the variable is not set
    :return: The environment variable value as a boolean
    :raises ValueError: If the value is not a recognised boolean
    """
    value_str = os.getenv(var_name)
    if value_str is None or value_str == "":
        return default

    normalized = value_str.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False

    msg = f"Environment variable {var_name} must be a boolean, got: {value_str}"
    raise ValueError(msg)


def load_config_from_env(env_file: str | Path | None) -> AppConfig:
    """Load application configuration from environment variables.

    :param env_file: Optional .env file loaded before reading the environment
    :return: An AppConfig instance populated with environment variable values
    """
    if env_file:
        load_dotenv(dotenv_path=env_file)

    return AppConfig(
        database_path=get_env_str("DATABASE_PATH", _DEFAULT_DATABASE_PATH),
        logging_level=get_env_str("LOGGING_LEVEL", "INFO"),
        root_path=get_env_str("ROOT_PATH", ""),
        bcrypt_rounds=get_env_int(
            "BCRYPT_ROUNDS",
            PasswordHasher.DEFAULT_ROUNDS,
            lambda rounds: PasswordHasher.MIN_ROUNDS
            <= rounds
            <= PasswordHasher.MAX_ROUNDS,
        ),
        create_default_admin=get_env_bool("CREATE_DEFAULT_ADMIN", default=True),
        admin_username=get_env_str(
            "DEFAULT_ADMIN_USERNAME",
            AdminAccountConfig.DEFAULT_USERNAME,
            lambda username: username != "",
        ),
        admin_password=get_env_str(
            "DEFAULT_ADMIN_PASSWORD",
            AdminAccountConfig.DEFAULT_PASSWORD,
            lambda password: password != "",
        ),
        admin_role=get_env_str(
            "DEFAULT_ADMIN_ROLE",
            Role.ADMIN.value,
            lambda role: role in {member.value for member in Role},
        ),
    )
