"""Shell hook commands for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import fail, get_config_manager, get_project_context
from ...core.constants import HOOK_TOOLS
from ...core.shell_hooks import ShellHookRenderer
from ...services.exceptions import ServiceError


@click.group()
def hook():
    """Render and install directory enter/leave hooks"""
    pass


@hook.command()
@click.option('--leave', is_flag=True, help='Show the leave script instead of the enter script')
@click.option('--tool', type=click.Choice(HOOK_TOOLS), help='Hook tool to render for (defaults to config)')
def show(leave, tool):
    """Print the hook script for this project"""
    project_root, _ = get_project_context()
    _, config = get_config_manager()
    renderer = ShellHookRenderer(project_root, config)
    click.echo(renderer.render_leave(tool) if leave else renderer.render_enter(tool), nl=False)


@hook.command()
@click.option('--tool', type=click.Choice(HOOK_TOOLS), help='Hook tool to install for (defaults to config)')
@click.option('--force', is_flag=True, help='Overwrite existing hook scripts')
def install(tool, force):
    """Write enter/leave scripts where the hook tool looks for them"""
    project_root, _ = get_project_context()
    config_manager, config = get_config_manager()
    renderer = ShellHookRenderer(project_root, config)
    try:
        paths = renderer.install(tool, force=force)
    except ServiceError as e:
        fail(str(e))

    if tool and tool != config.hook_tool:
        config.hook_tool = tool
        config_manager.save_config(config)

    click.echo(f"Installed enter hook: {paths['enter']}")
    click.echo(f"Installed leave hook: {paths['leave']}")
    click.echo(f"Use '{config.alias}' inside the directory to open a shell in the container.")
