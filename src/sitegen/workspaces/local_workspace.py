from typing import Any, Dict, List, Tuple, Union
from pathlib import Path
from .base import BaseWorkspace, CMD_TIMEOUT
import re
import subprocess

class LocalWorkspace(BaseWorkspace):
    """
    Local workspace that writes generated projects to a directory.
    WARNING: run() executes commands directly on your machine. Use with caution.
    """

    def __init__(
        self,
        root_path: Union[str, Path] = None,
        logger=None,
        **kwargs,
    ):
        super().__init__(logger)

        # Use provided root_path or default to current working directory
        if root_path:
            self.root_path = Path(root_path).resolve()
        else:
            self.root_path = Path.cwd()

        if not self.root_path.exists():
            self.root_path.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Created working directory: {self.root_path}")
        self.logger.info(f"Working directory: {self.root_path}")

    def _resolve(self, relative: str) -> Path:
        target = (self.root_path / relative).resolve()
        if target != self.root_path and self.root_path not in target.parents:
            raise ValueError(f"Path escapes workspace: {relative}")
        return target

    def mount(self, mount_tree: Dict[str, Any]) -> None:
        """Write every directory and file of the mount tree under root_path."""
        count = self._mount_entries(mount_tree, "")
        self.logger.info(f"Mounted {count} files into {self.root_path}")

    def _mount_entries(self, entries: Dict[str, Any], parent: str) -> int:
        count = 0
        for name, entry in entries.items():
            relative = f"{parent}/{name}" if parent else name
            target = self._resolve(relative)
            if "directory" in entry:
                target.mkdir(parents=True, exist_ok=True)
                count += self._mount_entries(entry["directory"], relative)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with open(target, "w", encoding="utf-8") as f:
                    f.write(entry.get("file", {}).get("contents", ""))
                count += 1
        return count

    def remove(self, paths: List[str]) -> None:
        """Delete files under root_path; missing files are ignored."""
        for relative in paths:
            target = self._resolve(relative)
            if target.is_file():
                target.unlink()
                self.logger.info(f"Removed {relative}")

    def run(
        self,
        code: str,
        timeout: int = CMD_TIMEOUT,
        workdir: Union[str, Path] = None,
    ) -> Tuple[str, str]:
        """
        Execute a command locally.

        Returns:
            Tuple of (output, exit_code_or_error).
        """
        exec_workdir = self.root_path if workdir is None else Path(workdir).resolve()

        if not exec_workdir.exists():
            return f"Error: Working directory {exec_workdir} does not exist", "-1"

        try:
            # shell=True allows using pipes, &&, redirects
            result = subprocess.run(
                code,
                shell=True,
                cwd=exec_workdir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT, # Merge stderr into stdout
                timeout=timeout,
                encoding='utf-8',
                errors='replace'
            )

            output = result.stdout
            exit_code = result.returncode

            # Remove ANSI escape codes
            output = re.sub(r"\x1b\[[0-9;]*m|\r", "", output)

            if exit_code != 0:
                return output, f"Error: Exit code {exit_code}"

            return output, str(exit_code)

        except subprocess.TimeoutExpired:
            return f"The command took too long to execute (>{timeout}s)", "-1"
        except OSError as e:
            return f"Error: {repr(e)}", "-1"

    def close(self):
        """Cleanup resources."""
        self.logger.info("LocalWorkspace closed")
