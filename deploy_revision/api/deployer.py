"""Deployer API for deployment operations"""

from pathlib import Path
from typing import List, Optional, Union

from ..executors import CommandExecutor
from ..hooks import TaskRunner
from ..models import DeployConfig, DeployResult, DeploymentStatus, ReleaseInfo
from ..providers import CheckoutProvider, GitCheckoutProvider
from ..services import ConfigService, DeployService
from . import query
from .exceptions import ConfigError


class Deployer:
    """Deployer class for deployment operations"""

    def __init__(self,
                 config: DeployConfig,
                 provider: Optional[CheckoutProvider] = None,
                 executor: Optional[CommandExecutor] = None,
                 runner: Optional[TaskRunner] = None):
        """
        Initialize deployer

        Args:
            config: Deployment configuration
            provider: Checkout provider (a git provider for config.repo
                by default)
            executor: Command executor (shell by default)
            runner: Task runner for callbacks
        """
        self.config = config
        self.provider = provider or self._create_provider(config)
        self.service = DeployService(config, self.provider, executor=executor, runner=runner)

    @classmethod
    def from_file(cls,
                  config_path: Optional[Union[str, Path]] = None,
                  **overrides) -> 'Deployer':
        """
        Create a deployer from a YAML configuration file

        Args:
            config_path: Configuration file (see ConfigService)
            **overrides: Settings that replace file values when not None

        Returns:
            Deployer
        """
        config = ConfigService(config_path).load_config(**overrides)
        return cls(config)

    @staticmethod
    def _create_provider(config: DeployConfig) -> CheckoutProvider:
        if not config.repo:
            raise ConfigError("'repo' is required when no checkout provider is given")
        return GitCheckoutProvider(
            config.repo,
            remote=config.remote,
            depth=1 if config.shallow_clone else None,
            enable_submodules=config.enable_submodules,
            environment=config.environment
        )

    @property
    def last_result(self) -> Optional[DeployResult]:
        """Result of the most recent deploy call"""
        return self.service.last_result

    @property
    def updated(self) -> bool:
        """Whether the most recent deploy call changed anything"""
        result = self.last_result
        return bool(result and result.updated)

    def deploy(self, revision: Optional[str] = None, force: Optional[bool] = None) -> DeployResult:
        """
        Deploy a revision

        Args:
            revision: Revision specifier (configured revision by default)
            force: Redeploy even if the revision is already live

        Returns:
            DeployResult: Deployment result

        Raises:
            DeployError: If any stage fails
        """
        return self.service.deploy(revision, force=force)

    def force_deploy(self, revision: Optional[str] = None) -> DeployResult:
        """
        Deploy a revision, running the full pipeline even if it is live

        Args:
            revision: Revision specifier (configured revision by default)

        Returns:
            DeployResult: Deployment result
        """
        return self.service.deploy(revision, force=True)

    def status(self) -> DeploymentStatus:
        """Get the live revision"""
        return query.status(self.config.deploy_to)

    def releases(self) -> List[ReleaseInfo]:
        """List release directories"""
        return query.releases(self.config.deploy_to)


def deploy(config: Optional[Union[DeployConfig, str, Path]] = None,
           revision: Optional[str] = None,
           force: Optional[bool] = None,
           **overrides) -> DeployResult:
    """
    Deploy a revision

    This is a convenience function that creates a Deployer instance
    and performs the deployment.

    Args:
        config: DeployConfig, or a configuration file path
        revision: Revision specifier
        force: Redeploy even if the revision is already live
        **overrides: Settings that replace file values when not None

    Returns:
        DeployResult: Deployment result

    Raises:
        ConfigError: If configuration cannot be loaded
        DeployError: If deployment fails
    """
    if isinstance(config, DeployConfig):
        if overrides:
            config = config.copy(**{k: v for k, v in overrides.items() if v is not None})
        deployer = Deployer(config)
    else:
        deployer = Deployer.from_file(config, **overrides)

    return deployer.deploy(revision, force=force)
