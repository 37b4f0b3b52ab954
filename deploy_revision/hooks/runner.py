"""Task runner and the ordered callback pipeline"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import HookContext, HookStage, ScriptTask, Task, as_task
from ..api.exceptions import CallbackError
from ..constants import IN_REPO_CALLBACK_DIR, IN_REPO_CALLBACK_EXTENSIONS


class TaskRunner:
    """Executes a single task and turns any failure into CallbackError"""

    def __init__(self):
        self.logger = logging.getLogger("TaskRunner")

    def execute(self, task: Task, context: HookContext) -> None:
        """
        Execute a task

        Args:
            task: Unit of work
            context: Hook context bound to the release

        Raises:
            CallbackError: If the task raises or returns False
        """
        stage = context.stage
        self.logger.debug(f"Executing {task.describe()} for {stage.value}")

        try:
            result = task.execute(context)
        except CallbackError as e:
            e.stage = stage.stage
            raise
        except Exception as e:
            raise CallbackError(
                f"{stage.value} hook ({task.describe()}) failed: {e}",
                stage.stage
            ) from e

        if result is False:
            raise CallbackError(
                f"{stage.value} hook ({task.describe()}) reported failure",
                stage.stage
            )


class CallbackPipeline:
    """Holds the task bound to each stage and runs them on request

    The orchestrator decides when each stage fires; the pipeline only
    knows what to run for it.
    """

    ORDER: List[HookStage] = list(HookStage)

    def __init__(self,
                 bindings: Optional[Dict[Any, Any]] = None,
                 runner: Optional[TaskRunner] = None,
                 in_repo_callbacks: bool = False):
        """
        Initialize pipeline

        Args:
            bindings: Stage (HookStage or its name) -> task binding
            runner: Task runner (a fresh one by default)
            in_repo_callbacks: Fall back to deploy/<stage> scripts in the
                release for unbound stages
        """
        self.runner = runner or TaskRunner()
        self.in_repo_callbacks = in_repo_callbacks
        self.logger = logging.getLogger("CallbackPipeline")
        self._tasks: Dict[HookStage, Optional[Task]] = {stage: None for stage in self.ORDER}

        for key, binding in (bindings or {}).items():
            self.bind(HookStage(key) if isinstance(key, str) else key, binding)

    def bind(self, stage: HookStage, binding: Any) -> None:
        """Bind a task, callable or command string to a stage"""
        self._tasks[stage] = as_task(binding)

    def task_for(self, stage: HookStage, release_path: Path) -> Optional[Task]:
        """Get the task that would run for a stage, if any"""
        task = self._tasks.get(stage)
        if task is None and self.in_repo_callbacks:
            script = self._find_in_repo_script(stage, release_path)
            if script:
                task = ScriptTask(script)
        return task

    def run(self, stage: HookStage, context: HookContext) -> bool:
        """
        Run the task bound to a stage

        Args:
            stage: Stage to run
            context: Hook context for the release

        Returns:
            True if a task ran, False for an unbound stage

        Raises:
            CallbackError: If the task fails
        """
        task = self.task_for(stage, context.release_path)
        if task is None:
            self.logger.debug(f"No callback bound for {stage.value}")
            return False

        self.logger.info(f"Running {stage.value} callback: {task.describe()}")
        self.runner.execute(task, context)
        return True

    def _find_in_repo_script(self, stage: HookStage, release_path: Path) -> Optional[Path]:
        callback_dir = Path(release_path) / IN_REPO_CALLBACK_DIR
        if not callback_dir.is_dir():
            return None

        for ext in IN_REPO_CALLBACK_EXTENSIONS:
            script = callback_dir / f"{stage.value}{ext}"
            if script.is_file():
                return script
        return None
