"""Models for gentoo-devenv."""

from .environment import EnvironmentConfig, PortageConfig, PortMapping, VolumeMount

__all__ = [
    'EnvironmentConfig',
    'PortageConfig',
    'PortMapping',
    'VolumeMount',
]
