"""Deployment configuration model"""

import copy
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..api.exceptions import ConfigError
from ..constants import (
    DEFAULT_CREATE_DIRS_BEFORE_SYMLINK,
    DEFAULT_PURGE_BEFORE_SYMLINK,
    DEFAULT_REMOTE,
    DEFAULT_REVISION,
    DEFAULT_SYMLINK_BEFORE_MIGRATE,
    DEFAULT_SYMLINKS,
)

CALLBACK_FIELDS = ("before_migrate", "before_symlink", "before_restart", "after_restart")


@dataclass
class DeployConfig:
    """Everything a single deployment needs to know

    Callback fields accept a ``Task``, a plain callable taking a
    ``HookContext``, or a shell command string.

    ``in_repo_callbacks`` is off by default, so a checkout that ships
    ``deploy/<stage>`` scripts runs none of them unless asked to. Chef's
    deploy_revision resource runs such scripts without any opt-in; set the
    flag to get that behaviour.
    """

    deploy_to: str
    repo: Optional[str] = None
    revision: str = DEFAULT_REVISION
    remote: str = DEFAULT_REMOTE
    shallow_clone: bool = False
    enable_submodules: bool = False

    # Shared resources
    symlink_before_migrate: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_SYMLINK_BEFORE_MIGRATE))
    symlinks: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SYMLINKS))
    create_dirs_before_symlink: List[str] = field(
        default_factory=lambda: list(DEFAULT_CREATE_DIRS_BEFORE_SYMLINK))
    purge_before_symlink: List[str] = field(
        default_factory=lambda: list(DEFAULT_PURGE_BEFORE_SYMLINK))
    overwrite_links: bool = False

    # Callbacks
    before_migrate: Any = None
    before_symlink: Any = None
    before_restart: Any = None
    after_restart: Any = None
    in_repo_callbacks: bool = False

    # Commands
    migrate: bool = False
    migration_command: Optional[str] = None
    restart_command: Optional[str] = None
    environment: Dict[str, str] = field(default_factory=dict)

    force: bool = False

    def __post_init__(self):
        """Validate configuration"""
        if not self.deploy_to:
            raise ConfigError("'deploy_to' is required")
        if not self.revision:
            raise ConfigError("'revision' must not be empty")

        for name in ("symlink_before_migrate", "symlinks", "environment"):
            _check_mapping(name, getattr(self, name))
        for name in ("create_dirs_before_symlink", "purge_before_symlink"):
            _check_string_list(name, getattr(self, name))
        for name in ("shallow_clone", "enable_submodules", "overwrite_links",
                     "in_repo_callbacks", "migrate", "force"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be true or false")

        for name in ("symlink_before_migrate", "symlinks"):
            for target in getattr(self, name).values():
                _check_relative(name, target)
        for name in ("create_dirs_before_symlink", "purge_before_symlink"):
            for target in getattr(self, name):
                _check_relative(name, target)

        if self.migrate and not self.migration_command:
            raise ConfigError("'migrate' is enabled but no 'migration_command' is set")

    def callbacks(self) -> Dict[str, Any]:
        """Get callback bindings keyed by stage name"""
        return {name: getattr(self, name) for name in CALLBACK_FIELDS}

    def copy(self, **changes) -> 'DeployConfig':
        """Return a copy with some fields replaced"""
        data = {f.name: copy.copy(getattr(self, f.name)) for f in fields(self)}
        data.update(changes)
        return DeployConfig(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary

        Only string callbacks are representable; other bindings are omitted.
        """
        data = {
            "deploy_to": self.deploy_to,
            "repo": self.repo,
            "revision": self.revision,
            "remote": self.remote,
            "shallow_clone": self.shallow_clone,
            "enable_submodules": self.enable_submodules,
            "symlink_before_migrate": dict(self.symlink_before_migrate),
            "symlinks": dict(self.symlinks),
            "create_dirs_before_symlink": list(self.create_dirs_before_symlink),
            "purge_before_symlink": list(self.purge_before_symlink),
            "overwrite_links": self.overwrite_links,
            "in_repo_callbacks": self.in_repo_callbacks,
            "migrate": self.migrate,
            "migration_command": self.migration_command,
            "restart_command": self.restart_command,
            "environment": dict(self.environment),
            "force": self.force,
        }

        for name, binding in self.callbacks().items():
            if isinstance(binding, str):
                data[name] = binding

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeployConfig':
        """Create from dictionary

        Raises:
            ConfigError: On unknown keys or malformed values
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        if "deploy_to" not in data:
            raise ConfigError("'deploy_to' is required")

        for name in CALLBACK_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"'{name}' must be a shell command string")

        values = dict(data)
        # YAML reads `symlinks: {}` as a dict but a bare `symlinks:` as None
        for name in ("symlink_before_migrate", "symlinks", "environment"):
            if name in values and values[name] is None:
                values[name] = {}
        for name in ("create_dirs_before_symlink", "purge_before_symlink"):
            if name in values and values[name] is None:
                values[name] = []

        if "revision" in values and values["revision"] is not None:
            values["revision"] = str(values["revision"])
        if "deploy_to" in values and values["deploy_to"] is not None:
            values["deploy_to"] = str(values["deploy_to"])

        return cls(**values)


def _check_mapping(name: str, value: Any) -> None:
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise ConfigError(f"'{name}' must map strings to strings")


def _check_string_list(name: str, value: Any) -> None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{name}' must be a list of strings")


def _check_relative(name: str, target: str) -> None:
    path = Path(target)
    if not target or path.is_absolute() or ".." in path.parts:
        raise ConfigError(f"'{name}' target must be a path inside the release: {target!r}")
