"""Up command for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import fail, get_lifecycle, session_option
from ...services.exceptions import ServiceError


@click.command()
@session_option
@click.option('--rebuild', is_flag=True, help='Rebuild the image before starting')
def up(session, rebuild):
    """Build the image if absent and start the session container if not running"""
    lifecycle = get_lifecycle(session)
    try:
        lifecycle.enter(force_rebuild=rebuild)
    except ServiceError as e:
        fail(str(e))
