"""Git checkout provider"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, Optional

from .base import CheckoutProvider
from ..api.exceptions import CheckoutError, ResolutionError
from ..constants import DEFAULT_DEPLOY_BRANCH, DEFAULT_REMOTE
from ..utils import git_utils

logger = logging.getLogger(__name__)


class GitCheckoutProvider(CheckoutProvider):
    """Resolve and check out revisions with the git command line"""

    def __init__(self,
                 repository: str,
                 remote: str = DEFAULT_REMOTE,
                 depth: Optional[int] = None,
                 enable_submodules: bool = False,
                 environment: Optional[Dict[str, str]] = None):
        """
        Initialize provider

        Args:
            repository: Repository URL or local path
            remote: Remote name used in the release clone
            depth: Shallow clone depth (None for a full clone)
            enable_submodules: Update submodules after checkout
            environment: Extra environment for git (e.g. GIT_SSH_COMMAND)
        """
        if not repository:
            raise ValueError("Git provider requires a repository")

        self.repository = repository
        self.remote = remote
        self.depth = depth
        self.enable_submodules = enable_submodules
        self.environment = dict(environment or {})

    def resolve(self, spec: str) -> str:
        if git_utils.is_full_sha(spec):
            return spec.lower()

        # A bare name would not match the peeled `^{}` entry of a tag
        pattern = spec if spec == "HEAD" else f"{spec}*"
        try:
            refs = git_utils.ls_remote(self.repository, pattern, env=self.environment)
        except subprocess.CalledProcessError as e:
            raise ResolutionError(
                f"Unable to query {self.repository}: {(e.stderr or '').strip() or e}",
                spec=spec
            ) from e
        except FileNotFoundError as e:
            raise ResolutionError("git executable not found", spec=spec) from e

        # Peeled tags name the commit rather than the tag object
        candidates = [
            spec,
            f"refs/tags/{spec}^{{}}",
            f"refs/tags/{spec}",
            f"refs/heads/{spec}",
        ]
        for ref in candidates:
            if ref in refs:
                logger.info(f"Resolved {spec} to {refs[ref]} ({ref})")
                return refs[ref]

        raise ResolutionError(
            f"Revision {spec!r} not found in {self.repository}",
            spec=spec
        )

    def checkout(self, revision: str, destination: Path) -> None:
        destination = Path(destination)
        logger.info(f"Cloning {self.repository} at {revision} into {destination}")

        try:
            git_utils.clone(
                self.repository,
                destination,
                remote=self.remote,
                depth=self.depth,
                env=self.environment
            )
            git_utils.checkout_revision(
                destination, revision, DEFAULT_DEPLOY_BRANCH, env=self.environment
            )
            if self.enable_submodules:
                git_utils.update_submodules(destination, env=self.environment)
        except subprocess.CalledProcessError as e:
            raise CheckoutError(
                f"Checkout of {revision} failed: {(e.stderr or '').strip() or e}",
                revision=revision,
                destination=str(destination)
            ) from e
        except FileNotFoundError as e:
            raise CheckoutError(
                "git executable not found",
                revision=revision,
                destination=str(destination)
            ) from e

        head = git_utils.get_head_revision(destination)
        if git_utils.is_full_sha(revision) and head != revision.lower():
            raise CheckoutError(
                f"Checkout of {revision} left {head or 'no commit'} at HEAD",
                revision=revision,
                destination=str(destination)
            )
        logger.debug(f"{destination} is at {head}")
