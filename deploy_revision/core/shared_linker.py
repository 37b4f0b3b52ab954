"""Symlinks from releases into the shared directory"""

import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Iterable, List

from .path_resolver import DeployLayout
from ..api.exceptions import LinkConflictError
from ..constants import MSG_LINK_UPDATED

logger = logging.getLogger(__name__)


class SharedLinker:
    """Applies shared-resource mappings to a release directory

    Mappings are ``{source: target}`` where source is relative to shared/
    (or absolute) and target is relative to the release. A target that is
    already a link to the expected source is left alone, so applying the
    same mapping to a reused release changes nothing.
    """

    def __init__(self, layout: DeployLayout, overwrite: bool = False):
        """
        Initialize linker

        Args:
            layout: Deploy root layout
            overwrite: Replace conflicting targets instead of failing
        """
        self.layout = layout
        self.overwrite = overwrite

    def link_before_migrate(self, release_path: Path, mapping: Dict[str, str]) -> List[Path]:
        """Link shared files into a release before any callback runs

        Args:
            release_path: Release directory
            mapping: Ordered source -> target mapping

        Returns:
            Links created or confirmed

        Raises:
            LinkConflictError: If a target exists and is not the expected link
        """
        links = []
        for source, target in mapping.items():
            links.append(self._link(release_path, source, target, self.overwrite))
        return links

    def link_after_switch(self,
                          release_path: Path,
                          mapping: Dict[str, str],
                          skeleton_dirs: Iterable[str],
                          purge: Iterable[str] = ()) -> List[Path]:
        """Create skeleton directories and persistent links in a release

        Must complete before `current` is repointed at the release.

        Args:
            release_path: Release directory
            mapping: Ordered source -> target mapping
            skeleton_dirs: Directories that must exist in every release
            purge: Targets that may be replaced when the checkout ships them

        Returns:
            Links created or confirmed

        Raises:
            LinkConflictError: If a target or skeleton path is incompatible
        """
        release_path = Path(release_path)
        linked_targets = {os.path.normpath(target) for target in mapping.values()}
        purge_targets = {os.path.normpath(target) for target in purge}

        for name in skeleton_dirs:
            if os.path.normpath(name) in linked_targets:
                continue
            self._ensure_directory(release_path / name)

        links = []
        for source, target in mapping.items():
            shared_source = self.layout.resolve_shared(source)
            if not Path(source).is_absolute() and not shared_source.exists():
                logger.info(f"Creating shared directory {shared_source}")
                shared_source.mkdir(parents=True, exist_ok=True)

            allow_overwrite = self.overwrite or os.path.normpath(target) in purge_targets
            links.append(self._link(release_path, source, target, allow_overwrite))

        return links

    def _ensure_directory(self, path: Path) -> None:
        if path.is_dir():
            return
        if path.exists() or path.is_symlink():
            raise LinkConflictError(str(path), "expected a directory")
        try:
            path.mkdir(parents=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise LinkConflictError(str(path), str(e)) from e
        logger.debug(f"Created directory {path}")

    def _link(self, release_path: Path, source: str, target: str, allow_overwrite: bool) -> Path:
        link_path = Path(release_path) / target
        expected = self.layout.resolve_shared(source)

        if link_path.is_symlink():
            if _same_path(link_target(link_path), expected):
                logger.debug(f"Link already in place: {link_path}")
                return link_path
            if not allow_overwrite:
                raise LinkConflictError(
                    str(link_path), f"links to {os.readlink(link_path)}, expected {expected}"
                )
            link_path.unlink()
        elif link_path.exists():
            if not allow_overwrite:
                raise LinkConflictError(str(link_path), "path exists and is not a symlink")
            if link_path.is_dir():
                shutil.rmtree(link_path)
            else:
                link_path.unlink()

        try:
            link_path.parent.mkdir(parents=True, exist_ok=True)
            link_path.symlink_to(expected)
        except (FileExistsError, NotADirectoryError) as e:
            raise LinkConflictError(str(link_path), str(e)) from e

        logger.info(MSG_LINK_UPDATED.format(link=link_path, target=expected))
        return link_path


def link_target(link: Path) -> Path:
    """Get the absolute path a symlink points at"""
    target = Path(os.readlink(link))
    if not target.is_absolute():
        target = link.parent / target
    return target


def _same_path(first: Path, second: Path) -> bool:
    return os.path.realpath(first) == os.path.realpath(second)
