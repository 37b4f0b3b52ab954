# deploy_revision/hooks/base.py
"""Lifecycle hook stages and the task abstraction"""

import logging
import os
import shlex
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..api.exceptions import CallbackError, ConfigError
from ..constants import (
    Stage,
    ENV_HOOK_STAGE,
    ENV_HOOK_RELEASE_PATH,
    ENV_HOOK_REVISION,
    ENV_HOOK_DEPLOY_TO,
    ENV_HOOK_SHARED_PATH,
    ENV_HOOK_CURRENT_PATH,
)
from ..executors.base import CommandExecutor


class HookStage(Enum):
    """Callback stages, in the order they fire"""
    BEFORE_MIGRATE = "before_migrate"
    BEFORE_SYMLINK = "before_symlink"
    BEFORE_RESTART = "before_restart"
    AFTER_RESTART = "after_restart"

    @property
    def stage(self) -> Stage:
        """Matching orchestrator stage"""
        return Stage(self.value)


@dataclass
class HookContext:
    """What a task gets to see while it runs"""
    stage: HookStage
    release_path: Path
    revision: str
    deploy_root: Path
    shared_path: Path
    current_path: Path
    executor: CommandExecutor
    environment: Dict[str, str] = field(default_factory=dict)

    def command_environment(self) -> Dict[str, str]:
        """Environment for commands started from this hook"""
        env = dict(self.environment)
        env.update({
            ENV_HOOK_STAGE: self.stage.value,
            ENV_HOOK_RELEASE_PATH: str(self.release_path),
            ENV_HOOK_REVISION: self.revision,
            ENV_HOOK_DEPLOY_TO: str(self.deploy_root),
            ENV_HOOK_SHARED_PATH: str(self.shared_path),
            ENV_HOOK_CURRENT_PATH: str(self.current_path),
        })
        return env

    def run(self, command: str, check: bool = True) -> int:
        """
        Run a shell command in the release directory

        Args:
            command: Shell command line
            check: Raise CallbackError on a non-zero exit

        Returns:
            Exit status
        """
        status = self.executor.run(command, self.release_path, self.command_environment())
        if check and status != 0:
            raise CallbackError(
                f"Command in {self.stage.value} exited with status {status}: {command}",
                self.stage.stage
            )
        return status


class Task(ABC):
    """A unit of work bound to a hook stage

    ``execute`` signals failure by raising, or by returning False.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def execute(self, context: HookContext) -> Optional[bool]:
        """Run the task against a release"""
        pass

    def describe(self) -> str:
        return self.__class__.__name__


class CallableTask(Task):
    """Wraps a plain function taking a HookContext"""

    def __init__(self, func: Callable[[HookContext], Any], name: str = None):
        super().__init__()
        self.func = func
        self.name = name or getattr(func, "__name__", repr(func))

    def execute(self, context: HookContext) -> Optional[bool]:
        result = self.func(context)
        return result if isinstance(result, bool) else None

    def describe(self) -> str:
        return f"callable {self.name}"


class CommandTask(Task):
    """Runs a shell command in the release directory"""

    def __init__(self, command: str):
        super().__init__()
        self.command = command

    def execute(self, context: HookContext) -> Optional[bool]:
        context.run(self.command)
        return True

    def describe(self) -> str:
        return f"command {self.command!r}"


class ScriptTask(Task):
    """Runs a callback script shipped inside the release"""

    def __init__(self, script_path: Path):
        super().__init__()
        self.script_path = Path(script_path)

    def command_line(self) -> str:
        script = shlex.quote(str(self.script_path))
        if self.script_path.suffix == '.py':
            return f"{shlex.quote(sys.executable)} {script}"
        if os.access(self.script_path, os.X_OK):
            return script
        return f"sh {script}"

    def execute(self, context: HookContext) -> Optional[bool]:
        self.logger.info(f"Executing in-repo callback {self.script_path}")
        context.run(self.command_line())
        return True

    def describe(self) -> str:
        return f"script {self.script_path}"


def as_task(binding: Any) -> Optional[Task]:
    """
    Turn a configured callback binding into a Task

    Args:
        binding: None, a Task, a callable, or a shell command string

    Returns:
        Task or None for an unbound stage
    """
    if binding is None:
        return None
    if isinstance(binding, Task):
        return binding
    if isinstance(binding, str):
        return CommandTask(binding) if binding.strip() else None
    if callable(binding):
        return CallableTask(binding)
    raise ConfigError(f"Unsupported callback binding: {binding!r}")
