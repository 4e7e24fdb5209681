"""Shell command for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import fail, get_lifecycle, session_option
from ...services.exceptions import ContainerNotFoundError, ServiceError


@click.command(context_settings=dict(ignore_unknown_options=True, allow_interspersed_args=False))
@session_option
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def shell(ctx, session, command):
    """Exec into the session container (a shell, or COMMAND if given)"""
    lifecycle = get_lifecycle(session)
    try:
        returncode = lifecycle.runner.exec_shell(list(command))
    except ContainerNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Run 'gentoo-devenv up' first.", err=True)
        ctx.exit(1)
    except ServiceError as e:
        fail(str(e))
    ctx.exit(returncode)
