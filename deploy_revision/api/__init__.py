"""Public API for deploy-revision"""

from .exceptions import (
    DeployRevisionError,
    ConfigError,
    DeployError,
    LayoutError,
    ResolutionError,
    CheckoutError,
    LinkConflictError,
    CallbackError,
    MigrationError,
    SwitchError,
    RestartError,
)
from .deployer import Deployer, deploy
from . import query

__all__ = [
    # Classes
    "Deployer",

    # Functions
    "deploy",
    "query",

    # Exceptions
    "DeployRevisionError",
    "ConfigError",
    "DeployError",
    "LayoutError",
    "ResolutionError",
    "CheckoutError",
    "LinkConflictError",
    "CallbackError",
    "MigrationError",
    "SwitchError",
    "RestartError",
]
