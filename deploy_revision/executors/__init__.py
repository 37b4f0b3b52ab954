"""Command executors"""

from .base import CommandExecutor
from .shell import ShellCommandExecutor

__all__ = [
    'CommandExecutor',
    'ShellCommandExecutor',
]
