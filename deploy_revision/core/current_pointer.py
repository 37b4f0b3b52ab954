"""The `current` symlink designating the live release"""

import logging
import os
from pathlib import Path
from typing import Optional

from .path_resolver import DeployLayout
from .shared_linker import link_target
from ..api.exceptions import SwitchError
from ..constants import TEMP_LINK_SUFFIX

logger = logging.getLogger(__name__)


class CurrentPointer:
    """Reads and atomically repoints deploy_to/current

    The link is never removed and recreated in place. A new link is built
    under a temporary name in the same directory and renamed over the old
    one, so anyone resolving `current` sees either the old or the new
    release.
    """

    def __init__(self, layout: DeployLayout):
        self.layout = layout

    @property
    def link_path(self) -> Path:
        return self.layout.current_link

    @property
    def temp_link_path(self) -> Path:
        link = self.link_path
        return link.with_name(link.name + TEMP_LINK_SUFFIX)

    def target(self) -> Optional[Path]:
        """Get the absolute path `current` points at, or None"""
        link = self.link_path
        if not link.is_symlink():
            return None

        return Path(os.path.normpath(link_target(link)))

    def read(self) -> Optional[str]:
        """Get the active revision

        Returns:
            Revision the link designates, or None when nothing is deployed
            or the link does not point at a release directory
        """
        target = self.target()
        if target is None:
            return None

        # The deploy root may be reached through a symlinked path
        releases_dir = os.path.realpath(self.layout.releases_dir)
        if os.path.realpath(target.parent) != releases_dir:
            logger.warning(f"{self.link_path} points outside {releases_dir}: {target}")
            return None

        return target.name

    def swap(self, release_path: Path) -> None:
        """Point `current` at a release directory

        Args:
            release_path: Release to make live

        Raises:
            SwitchError: If the link cannot be replaced; the previous
                target stays in effect
        """
        release_path = Path(release_path)
        if not release_path.is_dir():
            raise SwitchError(f"Release directory does not exist: {release_path}")

        link = self.link_path
        temp_link = self.temp_link_path

        try:
            # Leftover from an earlier failed swap
            if temp_link.exists() or temp_link.is_symlink():
                temp_link.unlink()

            temp_link.symlink_to(release_path, target_is_directory=True)
            os.replace(temp_link, link)
        except OSError as e:
            raise SwitchError(f"Failed to point {link} at {release_path}: {e}") from e

        logger.info(f"Switched {link} -> {release_path}")
