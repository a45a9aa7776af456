"""Tool and resource handler sets."""

from .basic import basic_tools, calculate, echo, get_current_time, server_resources
from .profile import ProfileHandlers

__all__ = [
    "ProfileHandlers",
    "basic_tools",
    "calculate",
    "echo",
    "get_current_time",
    "server_resources",
]
