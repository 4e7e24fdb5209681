"""Environment configuration models."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.constants import (
    DEFAULT_ALIAS,
    DEFAULT_BASE_IMAGE,
    DEFAULT_PACKAGES,
    DEFAULT_PORTAGE_IMAGE,
    DEFAULT_SHELL,
    DEFAULT_WORKDIR,
)


def valid_env_name(name: str) -> bool:
    """Whether name can be used in an ENV instruction and a shell."""
    return name.isidentifier() and name.isascii()


def unique_atoms(atoms: List[str]) -> List[str]:
    """Drop blank and repeated atoms, keeping the first occurrence."""
    seen = []
    for atom in atoms:
        atom = atom.strip()
        if atom and atom not in seen:
            seen.append(atom)
    return seen


class PortMapping(BaseModel):
    """A host port published from the container."""
    host_port: int = Field(..., ge=1, le=65535)
    container_port: int = Field(..., ge=1, le=65535)
    protocol: Literal["tcp", "udp"] = "tcp"

    def container_key(self) -> str:
        return f"{self.container_port}/{self.protocol}"


class VolumeMount(BaseModel):
    """A bind mount from the host into the container."""
    host_path: str
    container_path: str
    mode: Literal["rw", "ro"] = "rw"


class PortageConfig(BaseModel):
    """Portage configuration rendered into the image."""
    make_conf: Dict[str, str] = Field(default_factory=dict)
    package_use: Dict[str, List[str]] = Field(default_factory=dict)
    accept_keywords: Dict[str, List[str]] = Field(default_factory=dict)
    package_license: Dict[str, List[str]] = Field(default_factory=dict)


class EnvironmentConfig(BaseModel):
    """Development environment configuration for a project."""
    base_image: str = DEFAULT_BASE_IMAGE
    portage_image: str = DEFAULT_PORTAGE_IMAGE
    image_tag: Optional[str] = None
    packages: List[str] = Field(default_factory=lambda: list(DEFAULT_PACKAGES))
    portage: PortageConfig = Field(default_factory=PortageConfig)
    ports: List[PortMapping] = Field(default_factory=list)
    volumes: List[VolumeMount] = Field(default_factory=list)
    env_vars: Dict[str, str] = Field(default_factory=dict)
    workdir: str = DEFAULT_WORKDIR
    shell: str = DEFAULT_SHELL
    alias: str = DEFAULT_ALIAS
    hook_tool: Literal["smartcd", "autoenv"] = "smartcd"

    @field_validator("packages")
    @classmethod
    def dedupe_packages(cls, packages: List[str]) -> List[str]:
        return unique_atoms(packages)

    @field_validator("workdir")
    @classmethod
    def workdir_is_absolute(cls, workdir: str) -> str:
        if not workdir.startswith("/"):
            raise ValueError("workdir must be an absolute container path")
        return workdir

    @field_validator("env_vars")
    @classmethod
    def env_names_are_valid(cls, env_vars: Dict[str, str]) -> Dict[str, str]:
        invalid = [name for name in env_vars if not valid_env_name(name)]
        if invalid:
            raise ValueError(f"invalid environment variable name(s): {', '.join(invalid)}")
        return env_vars

    @model_validator(mode="after")
    def check_ports_and_mounts(self) -> "EnvironmentConfig":
        host_ports = [mapping.host_port for mapping in self.ports]
        duplicates = sorted({port for port in host_ports if host_ports.count(port) > 1})
        if duplicates:
            raise ValueError(f"host port mapped more than once: {', '.join(map(str, duplicates))}")

        paths = [mount.container_path for mount in self.volumes]
        duplicates = sorted({path for path in paths if paths.count(path) > 1})
        if duplicates:
            raise ValueError(f"container path mounted more than once: {', '.join(duplicates)}")
        if self.workdir in paths:
            raise ValueError(f"{self.workdir} is reserved for the project directory")
        return self
