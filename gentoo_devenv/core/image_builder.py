"""Docker image building functionality."""

import logging
from pathlib import Path
from typing import Callable, Optional

from ..models.environment import EnvironmentConfig
from ..services.docker_service import DockerService
from ..services.exceptions import DockerServiceError, ImageBuildError, ImageNotFoundError
from .constants import BUILD_DIR_NAME
from .dockerfile_generator import DockerfileGenerator
from .naming import image_name_for

logger = logging.getLogger(__name__)


class ImageBuilder:
    """Builds the Gentoo development image when it is missing."""

    def __init__(self, project_root: Path, data_dir: Path, config: EnvironmentConfig,
                 docker_service: Optional[DockerService] = None,
                 echo: Callable[[str], None] = print):
        """Initialize image builder."""
        self.project_root = project_root
        self.data_dir = data_dir
        self.config = config
        self.docker_service = docker_service or DockerService()
        self.echo = echo
        self.image_name = image_name_for(project_root, config.image_tag)
        self.build_dir = data_dir / BUILD_DIR_NAME

    def ensure_image(self, force_rebuild: bool = False, no_cache: bool = False) -> str:
        """Build the image unless it already exists.

        Returns:
            The image name

        Raises:
            DockerServiceError: If the build fails
        """
        exists = self.docker_service.image_exists(self.image_name)
        if exists and not force_rebuild:
            logger.debug(f"Image {self.image_name} already exists")
            return self.image_name

        if exists:
            self.echo("Removing existing image...")
            try:
                self.docker_service.remove_image(self.image_name)
            except ImageNotFoundError:
                pass  # Image was already gone

        self.build(no_cache=no_cache)
        return self.image_name

    def build(self, no_cache: bool = False):
        """Write the build context and run the build."""
        dockerfile = DockerfileGenerator(self.config).write_build_context(self.build_dir)
        self.echo(f"Building image {self.image_name} from {self.config.base_image}")
        try:
            _, logs = self.docker_service.build_image(
                path=str(self.build_dir),
                dockerfile=dockerfile.name,
                tag=self.image_name,
                rm=True,
                nocache=no_cache,
            )
        except DockerServiceError as e:
            if isinstance(e, ImageBuildError):
                self._echo_log(e.build_log)
            self.echo(f"Build failed. Build context saved at: {self.build_dir}")
            raise

        self._echo_log(logs)
        self.echo(f"Image built: {self.image_name}")

    def _echo_log(self, logs):
        for log in logs:
            if 'stream' in log:
                self.echo(log['stream'].rstrip('\n'))
