"""Constants used throughout gentoo-devenv."""


# Image defaults
DEFAULT_BASE_IMAGE = "gentoo/stage3:latest"
DEFAULT_PORTAGE_IMAGE = "gentoo/portage:latest"
DEFAULT_WORKDIR = "/workspace"
DEFAULT_SHELL = "/bin/bash"
DEFAULT_ALIAS = "devenv"

# Portage atoms installed into every image unless the user removes them
DEFAULT_PACKAGES = [
    "dev-lang/python",
    "dev-python/pip",
    "dev-python/virtualenv",
    "dev-vcs/git",
]

# Extra atoms proposed by `init` based on files found in the project
PROJECT_PACKAGES = {
    "poetry.lock": ["dev-python/poetry"],
    "tox.ini": ["dev-python/tox"],
    "noxfile.py": ["dev-python/nox"],
    "pytest.ini": ["dev-python/pytest"],
    "requirements.txt": ["dev-python/pip"],
    "setup.py": ["dev-python/setuptools"],
    ".pre-commit-config.yaml": ["dev-vcs/pre-commit"],
}

# Portage configuration files rendered into the build context
PORTAGE_DIR_NAME = "portage"
MAKE_CONF_FILE = "make.conf"
PACKAGE_USE_FILE = "package.use"
ACCEPT_KEYWORDS_FILE = "package.accept_keywords"
PACKAGE_LICENSE_FILE = "package.license"

# Container configuration
CONTAINER_PREFIX = "gentoo-devenv"
DATA_DIR_NAME = ".gentoo-devenv"
BUILD_DIR_NAME = "build"
DOCKERFILE_NAME = "Dockerfile"
CONFIG_FILE_NAME = "devenv_config.json"
EXPORT_FILE_NAME = "devenv.yaml"
KEEPALIVE_COMMAND = ["sleep", "infinity"]
STOP_TIMEOUT = 10

# Labels used to find containers belonging to a project
LABEL_MANAGED = "gentoo-devenv"
LABEL_PROJECT = "gentoo-devenv-project"
LABEL_SESSION = "gentoo-devenv-session"

# Environment variables shared with the shell hooks
SESSION_ENV_VAR = "GENTOO_DEVENV_SESSION"
ENGINE_ENV_VAR = "GENTOO_DEVENV_ENGINE"
DEFAULT_ENGINE = "docker"
CLI_NAME = "gentoo-devenv"

# Supported environment-hook tools
HOOK_TOOLS = ["smartcd", "autoenv"]
