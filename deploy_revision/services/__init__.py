# deploy_revision/services/__init__.py
"""Business logic services for deploy-revision"""

from .config_service import ConfigService
from .deploy_service import DeployService

__all__ = [
    "ConfigService",
    "DeployService",
]
