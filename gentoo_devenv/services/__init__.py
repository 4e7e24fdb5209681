"""Service layer for abstracting Docker operations."""

from .docker_service import DockerService
from .exceptions import (
    ServiceError,
    DockerServiceError,
    ImageNotFoundError,
    ImageBuildError,
    ContainerNotFoundError,
    ConfigError,
)

__all__ = [
    "DockerService",
    "ServiceError",
    "DockerServiceError",
    "ImageNotFoundError",
    "ImageBuildError",
    "ContainerNotFoundError",
    "ConfigError",
]
