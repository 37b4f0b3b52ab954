"""Shared CLI options and configuration loading"""

import sys
from functools import wraps
from typing import Callable, Optional

import click

from .output import console
from ...api.exceptions import ConfigError
from ...constants import EMOJI_ERROR
from ...services import ConfigService


def config_options(func: Callable) -> Callable:
    """Add --config and --deploy-to options to a command"""
    func = click.option(
        '--deploy-to',
        type=click.Path(file_okay=False),
        help='Deploy root (overrides the configuration file)'
    )(func)
    func = click.option(
        '-c', '--config', 'config_path',
        type=click.Path(dir_okay=False),
        help='Configuration file (default: ./deploy-revision.yaml)'
    )(func)
    return func


def exit_on_config_error(func: Callable) -> Callable:
    """Report configuration errors and exit with status 1"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            console.print(f"[red]{EMOJI_ERROR} Configuration error:[/red] {e}")
            sys.exit(1)

    return wrapper


def resolve_deploy_to(config_path: Optional[str], deploy_to: Optional[str]) -> str:
    """Get the deploy root from the command line or the configuration file

    Raises:
        ConfigError: If neither is available
    """
    if deploy_to:
        return deploy_to
    return ConfigService(config_path).load_config().deploy_to
