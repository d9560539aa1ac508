"""Configuration model and loader."""

from .loader import ENV_FIELDS, load_config  # noqa: F401
from .model import BridgeConfig  # noqa: F401

__all__ = ["BridgeConfig", "ENV_FIELDS", "load_config"]
