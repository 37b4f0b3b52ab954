"""CLI commands"""

from . import deploy
from . import status
from . import releases
from . import config

__all__ = [
    "deploy",
    "status",
    "releases",
    "config",
]
