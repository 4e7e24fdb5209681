"""Main CLI entry point for gentoo-devenv."""

import logging

import click

from ..core.constants import DEFAULT_ENGINE, ENGINE_ENV_VAR
from .commands.build import build
from .commands.clean import clean
from .commands.config import config
from .commands.down import down
from .commands.hook import hook
from .commands.init import init
from .commands.shell import shell
from .commands.status import status
from .commands.up import up


@click.group()
@click.option('--project-dir', '-C', type=click.Path(exists=True, file_okay=False, resolve_path=True),
              help='Project directory (defaults to the current directory)')
@click.option('--engine', envvar=ENGINE_ENV_VAR, default=DEFAULT_ENGINE, show_default=True,
              help='Container engine binary used for interactive exec')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, project_dir, engine, verbose):
    """gentoo-devenv - Python development in a Gentoo container"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    ctx.ensure_object(dict)
    ctx.obj['project_dir'] = project_dir
    ctx.obj['engine'] = engine


# Register commands
cli.add_command(init)
cli.add_command(build)
cli.add_command(up)
cli.add_command(shell)
cli.add_command(down)
cli.add_command(status)
cli.add_command(hook)
cli.add_command(config)
cli.add_command(clean)


if __name__ == '__main__':
    cli()
