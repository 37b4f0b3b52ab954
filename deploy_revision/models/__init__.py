# deploy_revision/models/__init__.py
"""Data models for deploy-revision"""

from .config import DeployConfig
from .release import ReleaseInfo, DeploymentStatus
from .result import DeployResult, OperationStatus

__all__ = [
    # Config models
    "DeployConfig",

    # Release models
    "ReleaseInfo",
    "DeploymentStatus",

    # Result models
    "DeployResult",
    "OperationStatus",
]
