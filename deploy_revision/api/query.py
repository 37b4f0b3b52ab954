"""Query API for inspecting a deploy root"""

from pathlib import Path
from typing import List, Optional, Union

from ..core import CurrentPointer, DeployLayout, ReleaseStore
from ..models import DeploymentStatus, ReleaseInfo


def status(deploy_to: Union[str, Path]) -> DeploymentStatus:
    """
    Describe what is live under a deploy root

    Reads the `current` link and checks the directory skeleton; nothing is
    created or changed.

    Args:
        deploy_to: Deploy root

    Returns:
        DeploymentStatus
    """
    layout = DeployLayout(deploy_to)
    pointer = CurrentPointer(layout)
    target = pointer.target()

    return DeploymentStatus(
        deploy_to=str(layout.deploy_root),
        current_revision=pointer.read(),
        current_target=str(target) if target else None,
        release_count=len(ReleaseStore(layout).list_releases()),
        issues=layout.validate()
    )


def releases(deploy_to: Union[str, Path], limit: Optional[int] = None) -> List[ReleaseInfo]:
    """
    List release directories, oldest first

    Args:
        deploy_to: Deploy root
        limit: Only return the newest N releases

    Returns:
        List of ReleaseInfo with the live release flagged
    """
    layout = DeployLayout(deploy_to)
    current = CurrentPointer(layout).read()
    found = ReleaseStore(layout).list_releases(current=current)

    if limit is not None:
        found = found[-limit:] if limit > 0 else []
    return found
