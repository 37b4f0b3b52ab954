"""Base command executor interface"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union


class CommandExecutor(ABC):
    """Interface for running shell commands on behalf of a deployment"""

    @abstractmethod
    def run(self,
            command: str,
            working_dir: Union[str, Path],
            environment: Optional[Dict[str, str]] = None) -> int:
        """
        Run a command and wait for it to finish

        Args:
            command: Shell command line
            working_dir: Directory to run the command in
            environment: Extra environment variables

        Returns:
            Exit status; non-zero means failure
        """
        raise NotImplementedError("Subclasses must implement run()")
