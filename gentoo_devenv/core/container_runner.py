"""Container running functionality."""

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..models.environment import EnvironmentConfig
from ..services.docker_service import DockerService
from ..services.exceptions import ContainerNotFoundError
from .constants import (
    DEFAULT_ENGINE,
    KEEPALIVE_COMMAND,
    LABEL_MANAGED,
    LABEL_PROJECT,
    LABEL_SESSION,
    STOP_TIMEOUT,
)
from .naming import container_name_for, image_name_for, sanitize_name

logger = logging.getLogger(__name__)


class ContainerRunner:
    """Runs the per-session development container."""

    def __init__(self, project_root: Path, config: EnvironmentConfig, session: str,
                 docker_service: Optional[DockerService] = None,
                 engine: str = DEFAULT_ENGINE):
        """Initialize container runner."""
        self.project_root = project_root
        self.config = config
        self.session = session
        self.engine = engine
        self.docker_service = docker_service or DockerService()
        self.image_name = image_name_for(project_root, config.image_tag)
        self.container_name = container_name_for(project_root, session)

    def _get_volumes(self) -> List[str]:
        """Bind specs (host:container:mode) for the container."""
        volumes = [f"{self.project_root.resolve()}:{self.config.workdir}:rw"]
        for mount in self.config.volumes:
            host_path = Path(mount.host_path).expanduser()
            if not host_path.exists():
                logger.warning(f"Skipping missing volume source: {host_path}")
                continue
            volumes.append(f"{host_path}:{mount.container_path}:{mount.mode}")
        return volumes

    def _get_ports(self) -> Dict[str, List[int]]:
        # One container port may be published on several host ports
        ports: Dict[str, List[int]] = {}
        for mapping in self.config.ports:
            ports.setdefault(mapping.container_key(), []).append(mapping.host_port)
        return ports

    def _get_labels(self) -> Dict[str, str]:
        return {
            LABEL_MANAGED: "true",
            LABEL_PROJECT: sanitize_name(self.project_root.name),
            LABEL_SESSION: self.session,
        }

    def _get_container_config(self) -> Dict:
        """Fixed flags for the long-running session container."""
        return {
            'image': self.image_name,
            'command': KEEPALIVE_COMMAND,
            'name': self.container_name,
            'volumes': self._get_volumes(),
            'ports': self._get_ports(),
            'environment': dict(self.config.env_vars),
            'working_dir': self.config.workdir,
            'labels': self._get_labels(),
            'tty': True,
            'stdin_open': True,
            'detach': True,
            'remove': False,
        }

    def get_container(self):
        """The session container, or None when it does not exist."""
        return self.docker_service.find_container(self.container_name)

    def is_running(self) -> bool:
        container = self.get_container()
        return container is not None and container.status == 'running'

    def ensure_running(self) -> bool:
        """Start the session container unless it is already running.

        Returns:
            True if a container was started, False if one was already running
        """
        container = self.get_container()
        if container is not None:
            if container.status == 'running':
                logger.debug(f"Container {self.container_name} already running")
                return False
            # Leftover from a shell that exited without cleanup
            logger.info(f"Removing stale container {self.container_name} ({container.status})")
            self.docker_service.remove_container(container, force=True)

        self.docker_service.run_container(**self._get_container_config())
        logger.info(f"Started container {self.container_name}")
        return True

    def exec_command(self, command: Optional[List[str]] = None) -> List[str]:
        """Engine CLI invocation that execs into the session container."""
        cmd = list(command) if command else [self.config.shell]
        return [
            self.engine, 'exec',
            '-it',
            '-w', self.config.workdir,
            self.container_name,
        ] + cmd

    def exec_shell(self, command: Optional[List[str]] = None) -> int:
        """Exec into the running container with a TTY.

        Uses the engine CLI through subprocess for proper TTY handling.

        Returns:
            Exit status of the exec'd process

        Raises:
            ContainerNotFoundError: If the session container is not running
        """
        if not self.is_running():
            raise ContainerNotFoundError(
                f"Container '{self.container_name}' is not running"
            )
        return subprocess.run(self.exec_command(command)).returncode

    def stop_and_remove(self) -> bool:
        """Stop and remove the session container.

        Returns:
            True if a container was removed, False if there was none
        """
        container = self.get_container()
        if container is None:
            return False
        try:
            if container.status == 'running':
                self.docker_service.stop_container(container, timeout=STOP_TIMEOUT)
            self.docker_service.remove_container(container)
        except ContainerNotFoundError:
            # Removed concurrently
            return False
        logger.info(f"Removed container {self.container_name}")
        return True
