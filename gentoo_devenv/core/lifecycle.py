"""Enter/leave lifecycle of a project's development container."""

import logging
from pathlib import Path
from typing import Callable, Optional

from ..models.environment import EnvironmentConfig
from ..services.docker_service import DockerService
from .constants import DEFAULT_ENGINE
from .container_runner import ContainerRunner
from .image_builder import ImageBuilder

logger = logging.getLogger(__name__)


class EnvironmentLifecycle:
    """Ties image building and the session container together.

    ``enter`` builds the image if it is absent and starts the container if it
    is not running. ``leave`` stops and removes the container. Both delegate
    to the container engine once per step and never retry.
    """

    def __init__(self, project_root: Path, data_dir: Path, config: EnvironmentConfig,
                 session: str, docker_service: Optional[DockerService] = None,
                 engine: str = DEFAULT_ENGINE,
                 echo: Callable[[str], None] = print):
        self.docker_service = docker_service or DockerService()
        self.builder = ImageBuilder(project_root, data_dir, config,
                                    docker_service=self.docker_service, echo=echo)
        self.runner = ContainerRunner(project_root, config, session,
                                      docker_service=self.docker_service, engine=engine)
        self.echo = echo

    @property
    def container_name(self) -> str:
        return self.runner.container_name

    def enter(self, force_rebuild: bool = False) -> bool:
        """Build-if-absent then run-if-absent.

        Returns:
            True if a new container was started
        """
        self.builder.ensure_image(force_rebuild=force_rebuild)
        started = self.runner.ensure_running()
        if started:
            self.echo(f"Started {self.container_name}")
        else:
            self.echo(f"{self.container_name} is already running")
        return started

    def leave(self) -> bool:
        """Stop and remove the session container, if any."""
        removed = self.runner.stop_and_remove()
        if removed:
            self.echo(f"Removed {self.container_name}")
        else:
            logger.debug(f"No container named {self.container_name}")
        return removed
