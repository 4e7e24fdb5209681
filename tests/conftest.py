import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock
import tempfile
from pathlib import Path


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_service():
    """Provides a mocked DockerService."""
    service = MagicMock()
    service.image_exists.return_value = True
    service.find_container.return_value = None
    service.list_containers.return_value = []
    service.build_image.return_value = (MagicMock(), [])
    return service


@pytest.fixture
def temp_project_dir():
    """Creates a temporary project directory with basic structure."""
    with tempfile.TemporaryDirectory() as tmpdir:
        project_path = Path(tmpdir) / "My Project"
        project_path.mkdir()

        (project_path / "src").mkdir()
        (project_path / "src" / "main.py").write_text("print('Hello, World!')")
        (project_path / ".gentoo-devenv").mkdir()

        yield project_path


@pytest.fixture
def env_config():
    """Provides an environment configuration with every section filled in."""
    from gentoo_devenv.models.environment import (
        EnvironmentConfig,
        PortageConfig,
        PortMapping,
    )

    return EnvironmentConfig(
        packages=["dev-lang/python:3.12", "dev-vcs/git"],
        portage=PortageConfig(
            make_conf={"MAKEOPTS": "-j4"},
            package_use={"dev-lang/python": ["sqlite", "tk"]},
            accept_keywords={"dev-python/uv": ["~amd64"]},
        ),
        ports=[PortMapping(host_port=8000, container_port=8000)],
        env_vars={"PYTHONDONTWRITEBYTECODE": "1"},
    )


@pytest.fixture
def mock_container():
    """Provides a running container mock."""
    container = MagicMock()
    container.name = "gentoo-devenv-my-project-1234"
    container.status = "running"
    return container


@pytest.fixture(autouse=True)
def clear_session_env(monkeypatch):
    """Keep a developer's hook session out of the tests."""
    monkeypatch.delenv("GENTOO_DEVENV_SESSION", raising=False)
    monkeypatch.delenv("GENTOO_DEVENV_ENGINE", raising=False)
