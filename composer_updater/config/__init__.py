"""Configuration management for composer-updater."""

from .config import Config, ConfigData, ConfigError, DelayData

__all__ = ["Config", "ConfigData", "ConfigError", "DelayData"]
