"""Configuration inspection commands"""

import json

import click
from rich.syntax import Syntax

from ..utils.options import config_options, exit_on_config_error
from ..utils.output import console
from ...services import ConfigService


@click.group()
def config():
    """Inspect deploy-revision configuration"""
    pass


@config.command()
@config_options
@click.option('--json', 'as_json', is_flag=True, help='Print the configuration as JSON')
@exit_on_config_error
def show(config_path, deploy_to, as_json):
    """Show the configuration a deployment would use

    Environment variables are expanded and command line overrides applied,
    so the output is exactly what `deploy` would run with.
    """
    service = ConfigService(config_path)
    loaded = service.load_config(deploy_to=deploy_to)

    if as_json:
        click.echo(json.dumps(loaded.to_dict(), indent=2))
        return

    console.print(f"[dim]# {service.config_path}[/dim]")
    console.print(Syntax(service.render_config(loaded), "yaml", background_color="default"))
