"""Status command implementation"""

import json

import click

from ..utils.options import config_options, exit_on_config_error, resolve_deploy_to
from ..utils.output import format_status
from ...api import query


@click.command()
@config_options
@click.option('--json', 'as_json', is_flag=True, help='Print the status as JSON')
@exit_on_config_error
def status(config_path, deploy_to, as_json):
    """Show the live revision

    Reads the `current` link under the deploy root. Nothing is changed.
    """
    info = query.status(resolve_deploy_to(config_path, deploy_to))

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
    else:
        format_status(info)
