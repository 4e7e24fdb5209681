"""Custom exceptions for service layer."""


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class DockerServiceError(ServiceError):
    """Exception raised for Docker service operations."""

    pass


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ContainerNotFoundError(DockerServiceError):
    """Exception raised when a Docker container is not found."""

    pass


class ConfigError(ServiceError):
    """Exception raised for invalid environment configuration."""

    pass


class ImageBuildError(DockerServiceError):
    """Exception raised when an image build fails, carrying the build log."""

    def __init__(self, message, build_log=None):
        super().__init__(message)
        self.build_log = list(build_log or [])
