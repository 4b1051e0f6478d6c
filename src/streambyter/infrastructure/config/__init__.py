"""Configuration models and loading."""

from .config_loader import ConfigLoader
from .config_models import (
    DiscoveryConfig,
    FanOutConfig,
    LoggingConfig,
    OutputConfig,
    ReaderConfig,
    StreambyterConfig,
)

__all__ = [
    "ConfigLoader",
    "DiscoveryConfig",
    "FanOutConfig",
    "LoggingConfig",
    "OutputConfig",
    "ReaderConfig",
    "StreambyterConfig",
]
