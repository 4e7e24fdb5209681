"""CLI helper functions shared by gentoo-devenv commands.

The helpers provide:
- Project context resolution from the root group's options
- Docker service and configuration loading with consistent error exits
- Session lifecycle construction
- Table formatting for output
"""

import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click
from tabulate import tabulate

from gentoo_devenv.core.constants import DATA_DIR_NAME, DEFAULT_ENGINE
from gentoo_devenv.core.lifecycle import EnvironmentLifecycle
from gentoo_devenv.core.naming import resolve_session
from gentoo_devenv.models.environment import EnvironmentConfig
from gentoo_devenv.services.docker_service import DockerService
from gentoo_devenv.services.exceptions import ServiceError
from gentoo_devenv.utils.config_manager import ConfigManager


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit non-zero."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def get_project_context() -> tuple[Path, Path]:
    """Get project root and data directory.

    The root is the group's --project-dir when given, the working directory
    otherwise.

    Returns:
        Tuple of (project_root, data_dir)
    """
    ctx = click.get_current_context(silent=True)
    project_dir = None
    if ctx is not None and ctx.obj:
        project_dir = ctx.obj.get('project_dir')
    project_root = Path(project_dir) if project_dir else Path.cwd()
    return project_root, project_root / DATA_DIR_NAME


def get_engine() -> str:
    ctx = click.get_current_context(silent=True)
    if ctx is not None and ctx.obj:
        return ctx.obj.get('engine') or DEFAULT_ENGINE
    return DEFAULT_ENGINE


def get_docker_service() -> DockerService:
    """Initialize Docker service, exiting with an error if Docker is unavailable."""
    try:
        return DockerService()
    except ServiceError as e:
        fail(str(e))


def get_config_manager() -> tuple[ConfigManager, EnvironmentConfig]:
    """Initialize ConfigManager and load the config, falling back to defaults.

    Returns:
        Tuple of (config_manager, config)
    """
    _, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)
    try:
        config = config_manager.load_or_default()
    except ServiceError as e:
        fail(str(e))
    return config_manager, config


def get_lifecycle(session: Optional[str] = None) -> EnvironmentLifecycle:
    """Build the lifecycle for the current project and shell session."""
    project_root, data_dir = get_project_context()
    _, config = get_config_manager()
    docker_service = get_docker_service()
    return EnvironmentLifecycle(
        project_root,
        data_dir,
        config,
        resolve_session(session),
        docker_service=docker_service,
        engine=get_engine(),
        echo=click.echo,
    )


def print_table(headers: list[str], rows: list[list[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults."""
    click.echo(tabulate(rows, headers=headers, tablefmt=tablefmt))


session_option = click.option(
    '--session', '-s',
    help='Session id the container is scoped to (defaults to the calling shell)',
)
