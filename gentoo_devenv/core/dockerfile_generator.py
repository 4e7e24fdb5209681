"""Dockerfile generation logic."""

import logging
import shutil
from pathlib import Path

from .constants import DOCKERFILE_NAME, PORTAGE_DIR_NAME
from .dockerfile_template import generate_dockerfile, render_portage_files
from ..models.environment import EnvironmentConfig

logger = logging.getLogger(__name__)


class DockerfileGenerator:
    """Writes the Gentoo build context for an environment."""

    def __init__(self, config: EnvironmentConfig):
        """Initialize generator."""
        self.config = config

    def generate(self) -> str:
        """Render the Dockerfile text."""
        return generate_dockerfile(self.config)

    def write_build_context(self, build_dir: Path) -> Path:
        """Write the Dockerfile and Portage files into build_dir.

        Any previous context is replaced so stale Portage files never leak
        into a new build.

        Returns:
            Path to the written Dockerfile
        """
        if build_dir.exists():
            shutil.rmtree(build_dir)
        portage_dir = build_dir / PORTAGE_DIR_NAME
        portage_dir.mkdir(parents=True)

        for filename, content in render_portage_files(self.config).items():
            (portage_dir / filename).write_text(content)

        dockerfile = build_dir / DOCKERFILE_NAME
        dockerfile.write_text(self.generate())
        logger.debug(f"Wrote build context to {build_dir}")
        return dockerfile
