"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import DEFAULT_CONFIG_FILE, ENV_CONFIG_PATH, ENV_DEPLOY_TO
from ..models.config import DeployConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for locating and loading deployment configuration"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            config_path: Explicit configuration file. Falls back to
                $DEPLOY_REVISION_CONFIG, then deploy-revision.yaml in the
                current directory.
        """
        self.config_path = self.find_config_path(config_path)
        self._config: Optional[DeployConfig] = None

    @staticmethod
    def find_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
        """Work out which configuration file to use"""
        if config_path:
            return Path(config_path).expanduser()

        env_path = os.environ.get(ENV_CONFIG_PATH)
        if env_path:
            return Path(env_path).expanduser()

        return Path.cwd() / DEFAULT_CONFIG_FILE

    @property
    def config(self) -> DeployConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_raw(self) -> Dict[str, Any]:
        """Read the configuration file into a dictionary

        Raises:
            ConfigError: If the file is missing or not valid YAML
        """
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {self.config_path} must be a mapping")

        return data

    def load_config(self, **overrides) -> DeployConfig:
        """Load configuration from file

        Args:
            **overrides: Values that replace file settings when not None

        Returns:
            Loaded configuration
        """
        data = self.load_raw()

        env_deploy_to = os.environ.get(ENV_DEPLOY_TO)
        if env_deploy_to:
            data['deploy_to'] = env_deploy_to

        for key, value in overrides.items():
            if value is not None:
                data[key] = value

        self._config = DeployConfig.from_dict(data)
        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

    def render_config(self, config: Optional[DeployConfig] = None) -> str:
        """Render configuration as YAML

        Args:
            config: Configuration to render (uses current if not provided)

        Returns:
            YAML document that loads back into the same configuration
        """
        config = config or self.config
        return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
