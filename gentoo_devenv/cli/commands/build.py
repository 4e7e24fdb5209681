"""Build command for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import fail, get_config_manager, get_docker_service, get_project_context
from ...core.image_builder import ImageBuilder
from ...services.exceptions import ServiceError


@click.command()
@click.option('--force-rebuild', is_flag=True, help='Force rebuild of the image even if it exists')
@click.option('--no-cache', is_flag=True, help='Build without using Docker cache (rebuilds all layers)')
def build(force_rebuild, no_cache):
    """Build the Gentoo development image if it is absent"""
    project_root, data_dir = get_project_context()
    _, config = get_config_manager()
    docker_service = get_docker_service()

    builder = ImageBuilder(project_root, data_dir, config,
                           docker_service=docker_service, echo=click.echo)

    if not force_rebuild and docker_service.image_exists(builder.image_name):
        click.echo(f"Image {builder.image_name} already exists. Use --force-rebuild to rebuild.")
        return

    if no_cache:
        click.echo("Building without cache - all layers will be rebuilt...")

    try:
        builder.ensure_image(force_rebuild=force_rebuild, no_cache=no_cache)
    except ServiceError as e:
        fail(str(e))
