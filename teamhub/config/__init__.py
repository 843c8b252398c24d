from .config import BaseConfig, ConfigError, HierarchyConfig
