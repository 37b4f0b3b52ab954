"""Path resolution and directory skeleton for a deploy root"""

import logging
from pathlib import Path
from typing import List, Union

from ..api.exceptions import LayoutError
from ..constants import CURRENT_LINK_NAME, RELEASES_DIR, SHARED_DIR

logger = logging.getLogger(__name__)


class DeployLayout:
    """Resolves paths within a deploy root

    deploy_to/
    ├── current -> deploy_to/releases/<revision>
    ├── releases/
    │   └── <revision>/
    └── shared/
    """

    def __init__(self, deploy_to: Union[str, Path]):
        """Initialize layout

        Args:
            deploy_to: Root directory of the deployment
        """
        self.deploy_root = Path(deploy_to).expanduser().absolute()

    @property
    def releases_dir(self) -> Path:
        return self.deploy_root / RELEASES_DIR

    @property
    def shared_dir(self) -> Path:
        return self.deploy_root / SHARED_DIR

    @property
    def current_link(self) -> Path:
        return self.deploy_root / CURRENT_LINK_NAME

    def release_path(self, revision: str) -> Path:
        """Get the directory for a revision

        Args:
            revision: Resolved revision identifier

        Returns:
            Path to releases/<revision>
        """
        return self.releases_dir / revision

    def resolve_shared(self, source: Union[str, Path]) -> Path:
        """Resolve a shared-resource source

        Absolute sources are used as given, anything else is taken
        relative to the shared directory.
        """
        source = Path(source)
        if source.is_absolute():
            return source
        return self.shared_dir / source

    def ensure(self) -> None:
        """Create deploy root, releases and shared directories

        Missing ancestors of the deploy root are created too.

        Raises:
            LayoutError: If a required path exists and is not a directory
        """
        for directory in (self.deploy_root, self.releases_dir, self.shared_dir):
            if directory.exists() and not directory.is_dir():
                raise LayoutError(f"Not a directory: {directory}", str(directory))
            if not directory.exists():
                logger.info(f"Creating directory {directory}")
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LayoutError(f"Cannot create {directory}: {e}", str(directory)) from e

    def validate(self) -> List[str]:
        """Check the skeleton without changing anything

        Returns:
            List of problems, empty when the layout is usable
        """
        issues = []

        if not self.deploy_root.is_dir():
            issues.append(f"Deploy root does not exist: {self.deploy_root}")
            return issues

        for directory in (self.releases_dir, self.shared_dir):
            if not directory.is_dir():
                issues.append(f"Missing directory: {directory}")

        current = self.current_link
        if current.exists() or current.is_symlink():
            if not current.is_symlink():
                issues.append(f"{current} exists but is not a symlink")
            elif not current.exists():
                issues.append(f"{current} is a dangling symlink")

        return issues
