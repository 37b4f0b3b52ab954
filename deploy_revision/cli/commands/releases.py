"""Releases command implementation"""

import json

import click

from ..utils.options import config_options, exit_on_config_error, resolve_deploy_to
from ..utils.output import format_releases
from ...api import query


@click.command()
@config_options
@click.option('-n', '--limit', type=int, help='Only show the newest N releases')
@click.option('--json', 'as_json', is_flag=True, help='Print releases as JSON')
@exit_on_config_error
def releases(config_path, deploy_to, limit, as_json):
    """List release directories

    The release `current` points at is marked with an asterisk.
    """
    found = query.releases(resolve_deploy_to(config_path, deploy_to), limit=limit)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in found], indent=2))
    else:
        format_releases(found)
