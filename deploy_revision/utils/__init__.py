"""Utility functions for deploy-revision"""

from .git_utils import is_full_sha, get_head_revision

__all__ = [
    "is_full_sha",
    "get_head_revision",
]
