"""Command-line interface for gentoo-devenv."""
