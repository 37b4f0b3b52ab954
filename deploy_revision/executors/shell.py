"""Run commands through the system shell"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, Optional, Union

from .base import CommandExecutor

logger = logging.getLogger(__name__)


class ShellCommandExecutor(CommandExecutor):
    """Executes commands with ``subprocess.run(..., shell=True)``"""

    def __init__(self,
                 environment: Optional[Dict[str, str]] = None,
                 timeout: Optional[float] = None):
        """
        Initialize executor

        Args:
            environment: Variables added to every command's environment
            timeout: Seconds before a command is killed (None waits forever)
        """
        self.environment = dict(environment or {})
        self.timeout = timeout

    def run(self,
            command: str,
            working_dir: Union[str, Path],
            environment: Optional[Dict[str, str]] = None) -> int:
        env = os.environ.copy()
        env.update(self.environment)
        if environment:
            env.update(environment)

        logger.info(f"Running command in {working_dir}: {command}")
        result = subprocess.run(
            command,
            shell=True,
            cwd=str(working_dir),
            env=env,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=self.timeout
        )

        if result.stdout:
            logger.debug(f"Command output: {result.stdout.strip()}")
        if result.stderr:
            logger.debug(f"Command error output: {result.stderr.strip()}")
        if result.returncode != 0:
            logger.warning(f"Command exited with status {result.returncode}: {command}")

        return result.returncode
