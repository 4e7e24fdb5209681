"""Down command for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import fail, get_lifecycle, session_option
from ...services.exceptions import ServiceError


@click.command()
@session_option
def down(session):
    """Stop and remove the session container"""
    lifecycle = get_lifecycle(session)
    try:
        if not lifecycle.leave():
            click.echo(f"No running container {lifecycle.container_name}")
    except ServiceError as e:
        fail(str(e))
