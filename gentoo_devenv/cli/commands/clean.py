"""Clean command for gentoo-devenv."""

import shutil

import click

from gentoo_devenv.cli.helpers import fail, get_config_manager, get_docker_service, get_project_context
from ...core.constants import LABEL_MANAGED, LABEL_PROJECT
from ...core.naming import image_name_for, sanitize_name
from ...services.exceptions import ImageNotFoundError, ServiceError


@click.command()
@click.option('--force', '-f', is_flag=True, help='Also stop and remove running containers')
@click.option('--purge', is_flag=True, help='Also delete the project configuration directory')
def clean(force, purge):
    """Remove the project's session containers and image"""
    project_root, data_dir = get_project_context()
    _, config = get_config_manager()
    docker_service = get_docker_service()

    try:
        containers = docker_service.list_containers(
            all=True,
            labels={
                LABEL_MANAGED: "true",
                LABEL_PROJECT: sanitize_name(project_root.name),
            },
        )
    except ServiceError as e:
        fail(str(e))

    removed = 0
    skipped = 0
    for container in containers:
        if container.status == 'running' and not force:
            click.echo(f"Skipping running container: {container.name}")
            skipped += 1
            continue
        try:
            docker_service.remove_container(container, force=True)
            click.echo(f"Removed container: {container.name}")
            removed += 1
        except ServiceError as e:
            click.echo(f"Failed to remove container {container.name}: {e}", err=True)

    if removed:
        click.echo(f"Removed {removed} container(s)")

    image_name = image_name_for(project_root, config.image_tag)
    if skipped:
        click.echo(f"Keeping image {image_name} while containers are running (use --force)")
    elif docker_service.image_exists(image_name):
        try:
            docker_service.remove_image(image_name)
            click.echo(f"Removed image: {image_name}")
        except ImageNotFoundError:
            pass  # Image was already gone
        except ServiceError as e:
            click.echo(f"Warning: Could not remove image {image_name}: {e}", err=True)

    if purge and data_dir.exists():
        shutil.rmtree(data_dir)
        click.echo(f"Deleted {data_dir}")
