"""Core functionality for gentoo-devenv."""
