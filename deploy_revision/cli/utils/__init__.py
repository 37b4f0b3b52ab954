"""CLI utility functions"""

from .output import (
    console,
    format_deploy_result,
    format_deploy_error,
    format_status,
    format_releases,
)

__all__ = [
    'console',
    'format_deploy_result',
    'format_deploy_error',
    'format_status',
    'format_releases',
]
