"""Status command for gentoo-devenv."""

import click

from gentoo_devenv.cli.helpers import (
    fail,
    get_config_manager,
    get_docker_service,
    get_project_context,
    print_table,
)
from ...core.constants import LABEL_MANAGED, LABEL_PROJECT, LABEL_SESSION
from ...core.naming import image_name_for, sanitize_name
from ...services.exceptions import ServiceError


@click.command()
def status():
    """Show the project's image and session containers"""
    project_root, _ = get_project_context()
    _, config = get_config_manager()
    docker_service = get_docker_service()

    image_name = image_name_for(project_root, config.image_tag)
    present = "present" if docker_service.image_exists(image_name) else "not built"
    click.echo(f"Image: {image_name} ({present})")

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

    if not containers:
        click.echo("No session containers")
        return

    rows = [
        [c.name, c.labels.get(LABEL_SESSION, ""), c.status]
        for c in containers
    ]
    print_table(["Container", "Session", "Status"], rows)
