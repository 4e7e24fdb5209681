"""Allow running as ``python -m gentoo_devenv``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
