"""Release directory storage keyed by revision"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .path_resolver import DeployLayout
from ..api.exceptions import CheckoutError, ResolutionError
from ..models.release import ReleaseInfo
from ..providers.base import CheckoutProvider

logger = logging.getLogger(__name__)


class ReleaseStore:
    """Maps revisions to release directories under releases/

    A release that already exists is handed back untouched, which is what
    makes redeploying an older revision a rollback instead of a rebuild.
    """

    def __init__(self, layout: DeployLayout, provider: Optional[CheckoutProvider] = None):
        self.layout = layout
        self.provider = provider

    def path_for(self, revision: str) -> Path:
        """Get the release directory for a revision

        Raises:
            ResolutionError: If the identifier cannot name a directory
        """
        if (not revision or revision in (".", "..")
                or "/" in revision or "\\" in revision or "\0" in revision):
            raise ResolutionError(f"Revision cannot be used as a release name: {revision!r}",
                                  spec=revision)
        return self.layout.release_path(revision)

    def exists(self, revision: str) -> bool:
        return self.path_for(revision).is_dir()

    def resolve_or_create(self, revision: str) -> Tuple[Path, bool]:
        """Return the release for revision, checking it out if needed

        Args:
            revision: Resolved revision identifier

        Returns:
            (release path, True if a checkout was performed)

        Raises:
            CheckoutError: If the provider fails to materialize the tree
        """
        release_path = self.path_for(revision)

        if release_path.is_dir():
            logger.info(f"Reusing existing release {release_path}")
            return release_path, False

        if release_path.exists() or release_path.is_symlink():
            raise CheckoutError(
                f"Release path exists but is not a directory: {release_path}",
                revision=revision,
                destination=str(release_path)
            )

        if self.provider is None:
            raise CheckoutError(
                f"No checkout provider available to create {release_path}",
                revision=revision,
                destination=str(release_path)
            )

        logger.info(f"Checking out {revision} into {release_path}")
        try:
            self.provider.checkout(revision, release_path)
        except CheckoutError:
            raise
        except Exception as e:
            raise CheckoutError(
                f"Checkout of {revision} failed: {e}",
                revision=revision,
                destination=str(release_path)
            ) from e

        if not release_path.is_dir():
            raise CheckoutError(
                f"Checkout of {revision} did not create {release_path}",
                revision=revision,
                destination=str(release_path)
            )

        return release_path, True

    def list_releases(self, current: Optional[str] = None) -> List[ReleaseInfo]:
        """List release directories, oldest first

        Args:
            current: Active revision, used to flag the live release

        Returns:
            List of ReleaseInfo
        """
        releases_dir = self.layout.releases_dir
        if not releases_dir.is_dir():
            return []

        releases = []
        for entry in releases_dir.iterdir():
            if not entry.is_dir() or entry.is_symlink():
                continue
            releases.append(ReleaseInfo(
                revision=entry.name,
                path=entry,
                is_current=entry.name == current,
                created_at=datetime.fromtimestamp(entry.stat().st_mtime)
            ))

        releases.sort(key=lambda r: (r.created_at, r.revision))
        return releases
