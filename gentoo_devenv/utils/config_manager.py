"""Configuration management utilities."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..models.environment import EnvironmentConfig, PortMapping, VolumeMount, unique_atoms, valid_env_name
from ..services.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages the per-project environment configuration."""

    def __init__(self, data_dir: Path):
        """Initialize config manager."""
        self.data_dir = data_dir
        self.data_dir.mkdir(exist_ok=True)
        self.config_file = data_dir / CONFIG_FILE_NAME

    def get_config(self) -> Optional[EnvironmentConfig]:
        """Load environment configuration, or None if never saved."""
        if not self.config_file.exists():
            return None
        try:
            data = json.loads(self.config_file.read_text())
            return EnvironmentConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration in {self.config_file}: {e}") from e

    def load_or_default(self) -> EnvironmentConfig:
        return self.get_config() or EnvironmentConfig()

    def save_config(self, config: EnvironmentConfig):
        """Save environment configuration."""
        self.config_file.write_text(config.model_dump_json(indent=2))
        logger.debug(f"Saved configuration to {self.config_file}")

    def add_packages(self, atoms: List[str]) -> EnvironmentConfig:
        """Append Portage atoms to the install list."""
        config = self.load_or_default()
        config.packages = unique_atoms(config.packages + list(atoms))
        self.save_config(config)
        return config

    def remove_packages(self, atoms: List[str]) -> EnvironmentConfig:
        config = self.load_or_default()
        missing = [atom for atom in atoms if atom not in config.packages]
        if missing:
            raise ConfigError(f"Not in package list: {', '.join(missing)}")
        config.packages = [atom for atom in config.packages if atom not in atoms]
        self.save_config(config)
        return config

    def set_use_flags(self, atom: str, flags: List[str]):
        """Set USE flags for an atom; an empty list clears the entry."""
        config = self.load_or_default()
        self._set_atom_entry(config.portage.package_use, atom, flags)
        self.save_config(config)

    def set_keywords(self, atom: str, keywords: List[str]):
        config = self.load_or_default()
        self._set_atom_entry(config.portage.accept_keywords, atom, keywords)
        self.save_config(config)

    def set_licenses(self, atom: str, licenses: List[str]):
        config = self.load_or_default()
        self._set_atom_entry(config.portage.package_license, atom, licenses)
        self.save_config(config)

    def set_make_conf(self, key: str, value: Optional[str]):
        """Set a make.conf variable; None removes it."""
        if not key.isidentifier():
            raise ConfigError(f"Invalid make.conf variable name: {key}")
        config = self.load_or_default()
        if value is None:
            config.portage.make_conf.pop(key, None)
        else:
            config.portage.make_conf[key] = value
        self.save_config(config)

    def add_port(self, host_port: int, container_port: int, protocol: str = "tcp"):
        """Publish a port, replacing any mapping for the same host port."""
        config = self.load_or_default()
        try:
            mapping = PortMapping(host_port=host_port, container_port=container_port, protocol=protocol)
        except ValidationError as e:
            raise ConfigError(f"Invalid port mapping: {e}") from e
        config.ports = [p for p in config.ports if p.host_port != host_port]
        config.ports.append(mapping)
        self.save_config(config)

    def remove_port(self, host_port: int):
        config = self.load_or_default()
        remaining = [p for p in config.ports if p.host_port != host_port]
        if len(remaining) == len(config.ports):
            raise ConfigError(f"No mapping for host port {host_port}")
        config.ports = remaining
        self.save_config(config)

    def add_volume(self, host_path: str, container_path: str, mode: str = "rw"):
        """Add a bind mount, replacing any mount at the same container path."""
        if not container_path.startswith("/"):
            raise ConfigError(f"Container path must be absolute: {container_path}")
        config = self.load_or_default()
        if container_path == config.workdir:
            raise ConfigError(f"{container_path} is reserved for the project directory")
        resolved = str(Path(host_path).expanduser().resolve())
        config.volumes = [v for v in config.volumes if v.container_path != container_path]
        config.volumes.append(VolumeMount(host_path=resolved, container_path=container_path, mode=mode))
        self.save_config(config)

    def remove_volume(self, container_path: str):
        config = self.load_or_default()
        remaining = [v for v in config.volumes if v.container_path != container_path]
        if len(remaining) == len(config.volumes):
            raise ConfigError(f"No volume mounted at {container_path}")
        config.volumes = remaining
        self.save_config(config)

    def update_env_vars(self, env_vars: Dict[str, str]):
        """Update environment variables in the configuration."""
        invalid = [name for name in env_vars if not valid_env_name(name)]
        if invalid:
            raise ConfigError(f"Invalid environment variable name: {', '.join(invalid)}")
        config = self.load_or_default()
        config.env_vars.update(env_vars)
        self.save_config(config)

    def set_alias(self, alias: str):
        if not alias.replace("-", "_").isidentifier():
            raise ConfigError(f"Invalid alias name: {alias}")
        config = self.load_or_default()
        config.alias = alias
        self.save_config(config)

    def export_yaml(self, path: Path) -> Path:
        """Write the configuration as YAML so it can be committed."""
        config = self.load_or_default()
        with open(path, 'w') as f:
            yaml.safe_dump(config.model_dump(), f, sort_keys=False)
        return path

    def import_yaml(self, path: Path) -> EnvironmentConfig:
        """Replace the configuration with one read from YAML."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            config = EnvironmentConfig(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e
        self.save_config(config)
        return config

    @staticmethod
    def _set_atom_entry(table: Dict[str, List[str]], atom: str, values: List[str]):
        if values:
            table[atom] = list(values)
        else:
            table.pop(atom, None)
