"""Lifecycle hooks for deploy-revision"""

from .base import (
    HookStage,
    HookContext,
    Task,
    CallableTask,
    CommandTask,
    ScriptTask,
    as_task,
)
from .runner import TaskRunner, CallbackPipeline

__all__ = [
    # Stages and context
    'HookStage',
    'HookContext',

    # Tasks
    'Task',
    'CallableTask',
    'CommandTask',
    'ScriptTask',
    'as_task',

    # Execution
    'TaskRunner',
    'CallbackPipeline',
]
