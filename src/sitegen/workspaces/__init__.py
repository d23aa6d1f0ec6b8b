from .local_workspace import LocalWorkspace
from .base import BaseWorkspace, get_logger

__all__ = [
    "BaseWorkspace",
    "LocalWorkspace",
    "get_logger",
]
