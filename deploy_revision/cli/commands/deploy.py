"""Deploy command implementation"""

import json
import sys

import click

from ..utils.options import config_options, exit_on_config_error
from ..utils.output import console, format_deploy_error, format_deploy_result
from ...api import Deployer
from ...api.exceptions import DeployError


@click.command()
@config_options
@click.option('-r', '--revision', help='Revision to deploy (branch, tag or commit)')
@click.option('--repo', help='Repository to deploy from (overrides the configuration file)')
@click.option('--force', is_flag=True, help='Run the full deployment even if the revision is live')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
@exit_on_config_error
def deploy(ctx, config_path, deploy_to, revision, repo, force, as_json):
    """Deploy a revision

    Checks the revision out into releases/<revision> (or reuses the
    directory if it exists), links shared resources, runs callbacks and
    switches the `current` link to it.

    The deploy root ends up as:

        deploy_to/
        ├── current -> deploy_to/releases/<revision>
        ├── releases/
        │   └── <revision>/
        └── shared/

    Examples:

        # Deploy the configured revision
        deploy-revision deploy

        # Deploy a tag
        deploy-revision deploy --revision v1.4.0

        # Re-run callbacks and restart for the live revision
        deploy-revision deploy --force
    """
    deployer = Deployer.from_file(config_path, deploy_to=deploy_to, repo=repo)

    try:
        result = deployer.deploy(revision, force=True if force else None)
    except DeployError as e:
        if as_json:
            click.echo(json.dumps({
                'status': 'failed',
                'stage': e.stage_name,
                'error_code': e.error_code,
                'error': str(e),
            }, indent=2))
        else:
            format_deploy_error(e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        format_deploy_result(result)
        if ctx.obj and ctx.obj.verbose:
            console.print(f"[dim]Stages: {', '.join(result.stages)}[/dim]")
