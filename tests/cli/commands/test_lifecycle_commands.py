"""Tests for the up, shell and down commands."""

from unittest.mock import MagicMock, patch

import pytest

from gentoo_devenv.cli.main import cli
from gentoo_devenv.services.exceptions import DockerServiceError


@pytest.fixture
def docker_service(mock_docker_service):
    with patch('gentoo_devenv.cli.helpers.DockerService', return_value=mock_docker_service):
        yield mock_docker_service


def invoke(cli_runner, project_dir, *args):
    return cli_runner.invoke(cli, ['-C', str(project_dir), *args])


class TestUpCommand:
    def test_up_builds_and_starts(self, cli_runner, temp_project_dir, docker_service):
        docker_service.image_exists.return_value = False

        result = invoke(cli_runner, temp_project_dir, 'up', '--session', '77')

        assert result.exit_code == 0
        docker_service.build_image.assert_called_once()
        assert docker_service.run_container.call_args.kwargs['name'] == 'gentoo-devenv-my-project-77'
        assert 'Started gentoo-devenv-my-project-77' in result.output

    def test_up_uses_session_env_var(self, cli_runner, temp_project_dir, docker_service, monkeypatch):
        monkeypatch.setenv('GENTOO_DEVENV_SESSION', '555')

        result = invoke(cli_runner, temp_project_dir, 'up')

        assert result.exit_code == 0
        assert docker_service.run_container.call_args.kwargs['name'] == 'gentoo-devenv-my-project-555'

    def test_up_already_running(self, cli_runner, temp_project_dir, docker_service, mock_container):
        docker_service.find_container.return_value = mock_container

        result = invoke(cli_runner, temp_project_dir, 'up', '-s', '1')

        assert result.exit_code == 0
        assert 'already running' in result.output
        docker_service.run_container.assert_not_called()

    def test_up_failure_exits_non_zero(self, cli_runner, temp_project_dir, docker_service):
        docker_service.run_container.side_effect = DockerServiceError("port is already allocated")

        result = invoke(cli_runner, temp_project_dir, 'up', '-s', '1')

        assert result.exit_code == 1
        assert 'Error: port is already allocated' in result.output

    def test_up_docker_unavailable(self, cli_runner, temp_project_dir):
        with patch('gentoo_devenv.cli.helpers.DockerService',
                   side_effect=DockerServiceError("Docker daemon is not running")):
            result = invoke(cli_runner, temp_project_dir, 'up')

        assert result.exit_code == 1
        assert 'Error: Docker daemon is not running' in result.output


class TestShellCommand:
    @patch('gentoo_devenv.core.container_runner.subprocess.run')
    def test_shell_execs_into_container(self, mock_run, cli_runner, temp_project_dir,
                                        docker_service, mock_container):
        docker_service.find_container.return_value = mock_container
        mock_run.return_value = MagicMock(returncode=0)

        result = invoke(cli_runner, temp_project_dir, 'shell', '-s', '9')

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert cmd[:3] == ['docker', 'exec', '-it']
        assert cmd[-2:] == ['gentoo-devenv-my-project-9', '/bin/bash']

    @patch('gentoo_devenv.core.container_runner.subprocess.run')
    def test_shell_passes_command_and_exit_status(self, mock_run, cli_runner, temp_project_dir,
                                                  docker_service, mock_container):
        docker_service.find_container.return_value = mock_container
        mock_run.return_value = MagicMock(returncode=5)

        result = invoke(cli_runner, temp_project_dir, 'shell', '-s', '9', 'pytest', '-x')

        assert result.exit_code == 5
        assert mock_run.call_args.args[0][-2:] == ['pytest', '-x']

    @patch('gentoo_devenv.core.container_runner.subprocess.run')
    def test_shell_uses_engine_option(self, mock_run, cli_runner, temp_project_dir,
                                      docker_service, mock_container):
        docker_service.find_container.return_value = mock_container
        mock_run.return_value = MagicMock(returncode=0)

        result = cli_runner.invoke(cli, ['-C', str(temp_project_dir), '--engine', 'podman', 'shell', '-s', '9'])

        assert result.exit_code == 0
        assert mock_run.call_args.args[0][0] == 'podman'

    def test_shell_without_container(self, cli_runner, temp_project_dir, docker_service):
        result = invoke(cli_runner, temp_project_dir, 'shell', '-s', '9')

        assert result.exit_code == 1
        assert "is not running" in result.output
        assert "gentoo-devenv up" in result.output


class TestDownCommand:
    def test_down_removes_container(self, cli_runner, temp_project_dir, docker_service, mock_container):
        docker_service.find_container.return_value = mock_container

        result = invoke(cli_runner, temp_project_dir, 'down', '-s', '3')

        assert result.exit_code == 0
        docker_service.stop_container.assert_called_once()
        docker_service.remove_container.assert_called_once_with(mock_container)
        assert 'Removed gentoo-devenv-my-project-3' in result.output

    def test_down_is_idempotent(self, cli_runner, temp_project_dir, docker_service):
        result = invoke(cli_runner, temp_project_dir, 'down', '-s', '3')

        assert result.exit_code == 0
        assert 'No running container gentoo-devenv-my-project-3' in result.output

    def test_down_failure(self, cli_runner, temp_project_dir, docker_service, mock_container):
        docker_service.find_container.return_value = mock_container
        docker_service.stop_container.side_effect = DockerServiceError("timeout")

        result = invoke(cli_runner, temp_project_dir, 'down', '-s', '3')

        assert result.exit_code == 1
        assert 'Error: timeout' in result.output
