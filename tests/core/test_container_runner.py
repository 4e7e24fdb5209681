from unittest.mock import MagicMock, patch

import pytest

from gentoo_devenv.core.container_runner import ContainerRunner
from gentoo_devenv.models.environment import PortMapping, VolumeMount
from gentoo_devenv.services.exceptions import ContainerNotFoundError


@pytest.fixture
def runner(temp_project_dir, env_config, mock_docker_service):
    return ContainerRunner(temp_project_dir, env_config, "1234", docker_service=mock_docker_service)


class TestContainerRunner:
    """Run-if-absent, exec and teardown of the session container."""

    def test_names(self, runner):
        assert runner.image_name == "gentoo-devenv-my-project"
        assert runner.container_name == "gentoo-devenv-my-project-1234"

    def test_is_running(self, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container
        assert runner.is_running() is True

        mock_container.status = "exited"
        assert runner.is_running() is False

        mock_docker_service.find_container.return_value = None
        assert runner.is_running() is False

    def test_ensure_running_starts_absent_container(self, runner, mock_docker_service, temp_project_dir):
        assert runner.ensure_running() is True

        kwargs = mock_docker_service.run_container.call_args.kwargs
        assert kwargs["image"] == "gentoo-devenv-my-project"
        assert kwargs["name"] == "gentoo-devenv-my-project-1234"
        assert kwargs["command"] == ["sleep", "infinity"]
        assert kwargs["detach"] is True
        assert kwargs["remove"] is False
        assert kwargs["ports"] == {"8000/tcp": [8000]}
        assert kwargs["volumes"] == [f"{temp_project_dir.resolve()}:/workspace:rw"]
        assert kwargs["environment"] == {"PYTHONDONTWRITEBYTECODE": "1"}
        assert kwargs["labels"] == {
            "gentoo-devenv": "true",
            "gentoo-devenv-project": "my-project",
            "gentoo-devenv-session": "1234",
        }

    def test_ensure_running_is_noop_when_running(self, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container

        assert runner.ensure_running() is False
        mock_docker_service.run_container.assert_not_called()

    def test_ensure_running_replaces_stopped_container(self, runner, mock_docker_service, mock_container):
        mock_container.status = "exited"
        mock_docker_service.find_container.return_value = mock_container

        assert runner.ensure_running() is True
        mock_docker_service.remove_container.assert_called_once_with(mock_container, force=True)
        mock_docker_service.run_container.assert_called_once()

    def test_extra_volumes_skip_missing_sources(self, runner, tmp_path):
        present = tmp_path / "cache"
        present.mkdir()
        runner.config.volumes = [
            VolumeMount(host_path=str(present), container_path="/root/.cache", mode="ro"),
            VolumeMount(host_path=str(tmp_path / "missing"), container_path="/data"),
        ]

        volumes = runner._get_volumes()

        assert f"{present}:/root/.cache:ro" in volumes
        assert not any(v.endswith(":/data:rw") for v in volumes)

    def test_container_port_published_on_several_host_ports(self, runner):
        runner.config.ports = [
            PortMapping(host_port=8000, container_port=80),
            PortMapping(host_port=8001, container_port=80),
            PortMapping(host_port=5353, container_port=53, protocol="udp"),
        ]

        assert runner._get_ports() == {"80/tcp": [8000, 8001], "53/udp": [5353]}

    def test_host_directory_mounted_at_several_paths(self, runner, tmp_path):
        shared = tmp_path / "shared"
        shared.mkdir()
        runner.config.volumes = [
            VolumeMount(host_path=str(shared), container_path="/a"),
            VolumeMount(host_path=str(shared), container_path="/b", mode="ro"),
        ]

        volumes = runner._get_volumes()

        assert f"{shared}:/a:rw" in volumes
        assert f"{shared}:/b:ro" in volumes
        assert len(volumes) == 3

    def test_exec_command_defaults_to_shell(self, runner):
        assert runner.exec_command() == [
            "docker", "exec", "-it", "-w", "/workspace", "gentoo-devenv-my-project-1234", "/bin/bash"
        ]
        assert runner.exec_command(["python", "-V"])[-2:] == ["python", "-V"]

    @patch("gentoo_devenv.core.container_runner.subprocess.run")
    def test_exec_shell_runs_engine(self, mock_run, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container
        mock_run.return_value = MagicMock(returncode=3)

        assert runner.exec_shell(["pytest"]) == 3
        mock_run.assert_called_once_with(runner.exec_command(["pytest"]))

    @patch("gentoo_devenv.core.container_runner.subprocess.run")
    def test_exec_shell_requires_running_container(self, mock_run, runner):
        with pytest.raises(ContainerNotFoundError, match="is not running"):
            runner.exec_shell()
        mock_run.assert_not_called()

    def test_stop_and_remove(self, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container

        assert runner.stop_and_remove() is True
        mock_docker_service.stop_container.assert_called_once_with(mock_container, timeout=10)
        mock_docker_service.remove_container.assert_called_once_with(mock_container)

    def test_stop_and_remove_skips_stop_for_exited(self, runner, mock_docker_service, mock_container):
        mock_container.status = "exited"
        mock_docker_service.find_container.return_value = mock_container

        assert runner.stop_and_remove() is True
        mock_docker_service.stop_container.assert_not_called()

    def test_stop_and_remove_absent_container(self, runner, mock_docker_service):
        assert runner.stop_and_remove() is False
        mock_docker_service.remove_container.assert_not_called()

    def test_stop_and_remove_concurrent_removal(self, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container
        mock_docker_service.remove_container.side_effect = ContainerNotFoundError("gone")

        assert runner.stop_and_remove() is False

    def test_stop_and_remove_container_vanishes_before_stop(self, runner, mock_docker_service, mock_container):
        mock_docker_service.find_container.return_value = mock_container
        mock_docker_service.stop_container.side_effect = ContainerNotFoundError("gone")

        assert runner.stop_and_remove() is False
        mock_docker_service.remove_container.assert_not_called()
