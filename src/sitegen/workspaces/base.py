import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

# Default timeout for commands
CMD_TIMEOUT = 300

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger

class BaseWorkspace(ABC):
    """
    Abstract base class for a project runtime.
    Receives the generated project as a mount tree and runs its shell steps.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(self.__class__.__name__)

    @abstractmethod
    def mount(self, mount_tree: Dict[str, Any]) -> None:
        """
        Write a project into the workspace.

        mount_tree maps names to {"directory": {...}} or {"file": {"contents": str}}.
        """
        pass

    @abstractmethod
    def remove(self, paths: List[str]) -> None:
        """Delete project files that no longer belong to the project."""
        pass

    @abstractmethod
    def run(
        self,
        code: str,
        timeout: int = CMD_TIMEOUT,
        workdir: str = None,
    ) -> Tuple[str, str]:
        """
        Execute a command.

        Returns:
            Tuple of (output, exit_code_or_error).
        """
        pass

    @abstractmethod
    def close(self):
        """Cleanup resources."""
        pass
