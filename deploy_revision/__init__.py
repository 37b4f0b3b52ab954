"""deploy-revision - symlink-switching release deployments.

Checks revisions out into releases/<revision>, links shared resources into
them, runs lifecycle callbacks and atomically repoints `current` at the new
release. Redeploying a revision that already has a release directory reuses
it as-is.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.deployer import Deployer, deploy

# Data models
from .models import DeployConfig, DeployResult, DeploymentStatus, ReleaseInfo

# Hooks
from .hooks import HookStage, HookContext, Task, CallableTask, CommandTask

# Collaborators
from .providers import CheckoutProvider, GitCheckoutProvider
from .executors import CommandExecutor, ShellCommandExecutor

# Exceptions
from .api.exceptions import (
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

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",
    "deploy",

    # Data models
    "DeployConfig",
    "DeployResult",
    "DeploymentStatus",
    "ReleaseInfo",

    # Hooks
    "HookStage",
    "HookContext",
    "Task",
    "CallableTask",
    "CommandTask",

    # Collaborators
    "CheckoutProvider",
    "GitCheckoutProvider",
    "CommandExecutor",
    "ShellCommandExecutor",

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
