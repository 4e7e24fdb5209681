"""Init command for gentoo-devenv."""

import click
import questionary

from gentoo_devenv.cli.helpers import fail, get_project_context
from ...core.constants import DEFAULT_ALIAS, HOOK_TOOLS
from ...core.naming import image_name_for
from ...models.environment import EnvironmentConfig, unique_atoms
from ...services.exceptions import ServiceError
from ...utils.config_manager import ConfigManager
from ...utils.project_detector import ProjectDetector


@click.command()
@click.option('--yes', '-y', is_flag=True, help='Accept detected packages without prompting')
@click.option('--force', is_flag=True, help='Overwrite an existing configuration')
@click.option('--base-image', help='Gentoo base image to build from')
@click.option('--alias', default=DEFAULT_ALIAS, show_default=True, help='Shell alias that opens the container')
@click.option('--hook-tool', type=click.Choice(HOOK_TOOLS), default='smartcd', show_default=True)
def init(yes, force, base_image, alias, hook_tool):
    """Create the environment configuration for this project"""
    project_root, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)

    try:
        existing = config_manager.get_config()
    except ServiceError as e:
        if not force:
            fail(f"{e} (use --force to overwrite)")
        existing = None
    if existing and not force:
        click.echo(f"Configuration already exists at {config_manager.config_file}. Use --force to overwrite.")
        return

    config = EnvironmentConfig(alias=alias, hook_tool=hook_tool)
    if base_image:
        config.base_image = base_image

    suggestions = [
        atom for atom in ProjectDetector(project_root).suggest_packages()
        if atom not in config.packages
    ]
    if suggestions and not yes:
        selected = questionary.checkbox(
            "Detected project tooling. Install these packages too?",
            choices=[questionary.Choice(atom, checked=True) for atom in suggestions],
        ).ask()
        # None when the prompt is cancelled
        suggestions = selected or []
    config.packages = unique_atoms(config.packages + suggestions)

    config_manager.save_config(config)

    click.echo(f"Initialized {image_name_for(project_root)} in {data_dir}")
    click.echo(f"Packages: {' '.join(config.packages)}")
    click.echo("Next: 'gentoo-devenv hook install' to enable the directory hooks.")
