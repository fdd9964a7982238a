"""Configuration models."""

from .config import CatalogConfig, Config, RemoteConfig, load_config, save_config

__all__ = ["CatalogConfig", "Config", "RemoteConfig", "load_config", "save_config"]
