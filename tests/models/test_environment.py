import pytest
from pydantic import ValidationError

from gentoo_devenv.models.environment import (
    EnvironmentConfig,
    PortMapping,
    VolumeMount,
    unique_atoms,
    valid_env_name,
)


class TestEnvironmentConfig:
    """Defaults and validation of the environment model."""

    def test_defaults(self):
        config = EnvironmentConfig()

        assert config.base_image == "gentoo/stage3:latest"
        assert config.portage_image == "gentoo/portage:latest"
        assert "dev-lang/python" in config.packages
        assert config.workdir == "/workspace"
        assert config.alias == "devenv"
        assert config.hook_tool == "smartcd"

    def test_default_packages_are_not_shared(self):
        first = EnvironmentConfig()
        first.packages.append("app-editors/vim")

        assert "app-editors/vim" not in EnvironmentConfig().packages

    def test_packages_are_deduplicated(self):
        config = EnvironmentConfig(packages=["dev-vcs/git", " dev-vcs/git ", "", "dev-lang/python"])
        assert config.packages == ["dev-vcs/git", "dev-lang/python"]

    def test_workdir_must_be_absolute(self):
        with pytest.raises(ValidationError):
            EnvironmentConfig(workdir="workspace")

    def test_hook_tool_choices(self):
        with pytest.raises(ValidationError):
            EnvironmentConfig(hook_tool="direnv")

    def test_round_trip_through_json(self, env_config):
        restored = EnvironmentConfig.model_validate_json(env_config.model_dump_json())
        assert restored == env_config

    def test_host_port_mapped_once(self):
        with pytest.raises(ValidationError, match="host port mapped more than once: 8000"):
            EnvironmentConfig(ports=[
                PortMapping(host_port=8000, container_port=80),
                PortMapping(host_port=8000, container_port=81),
            ])

    def test_container_port_may_be_published_twice(self):
        config = EnvironmentConfig(ports=[
            PortMapping(host_port=8000, container_port=80),
            PortMapping(host_port=8001, container_port=80),
        ])
        assert len(config.ports) == 2

    def test_container_path_mounted_once(self):
        with pytest.raises(ValidationError, match="container path mounted more than once: /data"):
            EnvironmentConfig(volumes=[
                VolumeMount(host_path="/srv/a", container_path="/data"),
                VolumeMount(host_path="/srv/b", container_path="/data"),
            ])

    def test_workdir_cannot_be_mounted_over(self):
        with pytest.raises(ValidationError, match="reserved for the project directory"):
            EnvironmentConfig(volumes=[VolumeMount(host_path="/x", container_path="/workspace")])

    def test_custom_workdir_is_reserved(self):
        config = EnvironmentConfig(workdir="/src", volumes=[VolumeMount(host_path="/x", container_path="/workspace")])
        assert config.volumes[0].container_path == "/workspace"

        with pytest.raises(ValidationError, match="reserved"):
            EnvironmentConfig(workdir="/src", volumes=[VolumeMount(host_path="/x", container_path="/src")])

    def test_env_var_names(self):
        with pytest.raises(ValidationError, match="invalid environment variable name"):
            EnvironmentConfig(env_vars={"A B": "1"})
        with pytest.raises(ValidationError):
            EnvironmentConfig(env_vars={"A=B": "1"})


class TestPortMapping:
    def test_container_key(self):
        assert PortMapping(host_port=5432, container_port=5432, protocol="udp").container_key() == "5432/udp"

    def test_port_range(self):
        with pytest.raises(ValidationError):
            PortMapping(host_port=0, container_port=80)


def test_unique_atoms_keeps_first_occurrence():
    assert unique_atoms(["b", "a", "b"]) == ["b", "a"]


@pytest.mark.parametrize("name,expected", [
    ("PYTHONPATH", True),
    ("_private", True),
    ("A B", False),
    ("A=B", False),
    ("1ST", False),
    ("", False),
])
def test_valid_env_name(name, expected):
    assert valid_env_name(name) is expected
