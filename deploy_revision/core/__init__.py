"""Core functionality for deploy-revision"""

from .path_resolver import DeployLayout
from .release_store import ReleaseStore
from .current_pointer import CurrentPointer
from .shared_linker import SharedLinker

__all__ = [
    "DeployLayout",
    "ReleaseStore",
    "CurrentPointer",
    "SharedLinker",
]
