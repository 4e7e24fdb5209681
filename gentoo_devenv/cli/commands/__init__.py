"""Commands for the gentoo-devenv CLI."""
