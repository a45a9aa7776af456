"""Configuration: environment detection and server settings."""

from .environment import EnvironmentDetector, detect_transport
from .settings import ServerSettings, load_settings

__all__ = ["EnvironmentDetector", "ServerSettings", "detect_transport", "load_settings"]
