"""
Config classes that read settings from the environment and/or a .env file.
"""
import os
import logging
from abc import abstractmethod
from typing import Optional
from dotenv import load_dotenv

from teamhub.ids import DEFAULT_ID_LENGTH, MIN_ID_LENGTH
from teamhub.messaging.enums import MessageAdapterType

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a setting holds a value that cannot be used."""


class BaseConfig():
    """
    Config class that loads a .env file and snapshots the environment.
    """
    def __init__(self, dotenv_path: Optional[str] = None):
        load_dotenv(dotenv_path)
        # Get all environment variables and store them in a dictionary
        self.env_vars = {key: os.getenv(key) for key in os.environ}

    def get_env_vars(self) -> dict:
        """
        Return the dictionary containing all environment variables
        """
        return self.env_vars

    def get_env_var(self, var_name: str, default=None):
        """
        Retrieve the value of the specified environment variable
        Args:
            var_name (str) : Name of the env var to fetch
            default : Value returned when the var is not set
        """
        if var_name in self.env_vars.keys():
            return self.env_vars[var_name]
        if default is None:
            logger.warning("Variable %s not found.", var_name)
        return default

    def get_var_as_int(self, var_name: str, default: int) -> int:
        """
        Returns a var parsed as int, or `default` when unset
        """
        value = self.get_env_var(var_name, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{var_name} must be an integer, got {value!r}") from e

    @abstractmethod
    def validate_env_vars(self):
        """
        Abstract method for validation of the env vars.
        """


class HierarchyConfig(BaseConfig):
    """
    Settings for the hierarchy store, its notifications and logging.
    """
    ID_LENGTH = 'TEAMHUB_ID_LENGTH'
    NOTIFICATION_QUEUE = 'TEAMHUB_NOTIFICATION_QUEUE'
    MESSAGE_ADAPTER = 'TEAMHUB_MESSAGE_ADAPTER'
    NOTIFICATION_HISTORY = 'TEAMHUB_NOTIFICATION_HISTORY'
    LOG_LEVEL = 'TEAMHUB_LOG_LEVEL'

    def __init__(self, dotenv_path: Optional[str] = None):
        super().__init__(dotenv_path)
        self.validate_env_vars()

    @property
    def id_length(self) -> int:
        return self.get_var_as_int(self.ID_LENGTH, DEFAULT_ID_LENGTH)

    @property
    def notification_queue(self) -> str:
        return self.get_env_var(self.NOTIFICATION_QUEUE, 'teamhub-notifications')

    @property
    def message_adapter_type(self) -> MessageAdapterType:
        return MessageAdapterType(self.get_env_var(self.MESSAGE_ADAPTER, 'memory').lower())

    @property
    def notification_history(self) -> int:
        return self.get_var_as_int(self.NOTIFICATION_HISTORY, 50)

    @property
    def log_level(self) -> str:
        return self.get_env_var(self.LOG_LEVEL, 'INFO').upper()

    def validate_env_vars(self):
        """
        Check every setting up front so a bad value fails at startup.
        """
        if self.id_length < MIN_ID_LENGTH:
            raise ConfigError(f"{self.ID_LENGTH} must be at least {MIN_ID_LENGTH}, got {self.id_length}")
        if self.notification_history < 1:
            raise ConfigError(f"{self.NOTIFICATION_HISTORY} must be positive, got {self.notification_history}")
        try:
            self.message_adapter_type
        except ValueError as e:
            choices = ', '.join(str(t) for t in MessageAdapterType)
            raise ConfigError(f"{self.MESSAGE_ADAPTER} must be one of: {choices}") from e
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"{self.LOG_LEVEL} is not a logging level: {self.log_level}")
