"""Configuration management commands for gentoo-devenv."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from gentoo_devenv.cli.helpers import fail, get_config_manager, get_project_context
from ...core.constants import EXPORT_FILE_NAME
from ...models.environment import EnvironmentConfig
from ...services.exceptions import ServiceError
from ...utils.config_manager import ConfigManager


def _parse_port(spec: str) -> tuple[int, int, str]:
    """Parse HOST:CONTAINER[/PROTO]."""
    mapping, _, protocol = spec.partition('/')
    host, sep, container = mapping.partition(':')
    if not sep:
        container = host
    try:
        return int(host), int(container), protocol or 'tcp'
    except ValueError:
        raise click.BadParameter(f"expected HOST:CONTAINER[/PROTO], got '{spec}'")


def _parse_volume(spec: str) -> tuple[str, str, str]:
    """Parse HOST:CONTAINER[:MODE]."""
    parts = spec.split(':')
    if len(parts) == 2:
        return parts[0], parts[1], 'rw'
    if len(parts) == 3 and parts[2] in ('rw', 'ro'):
        return parts[0], parts[1], parts[2]
    raise click.BadParameter(f"expected HOST:CONTAINER[:rw|ro], got '{spec}'")


@click.group()
def config():
    """Manage the environment configuration"""
    pass


@config.command()
@click.argument('atoms', nargs=-1, required=True)
def package(atoms):
    """Add Portage atoms to the install list"""
    config_manager, _ = get_config_manager()
    updated = config_manager.add_packages(list(atoms))
    click.echo(f"Packages: {' '.join(updated.packages)}")


@config.command()
@click.argument('atoms', nargs=-1, required=True)
def remove_package(atoms):
    """Remove Portage atoms from the install list"""
    config_manager, _ = get_config_manager()
    try:
        updated = config_manager.remove_packages(list(atoms))
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Packages: {' '.join(updated.packages)}")


@config.command(context_settings=dict(ignore_unknown_options=True))
@click.argument('atom')
@click.argument('flags', nargs=-1)
def use(atom, flags):
    """Set USE flags for ATOM (no flags clears the entry)"""
    config_manager, _ = get_config_manager()
    config_manager.set_use_flags(atom, list(flags))
    click.echo(f"package.use: {atom} {' '.join(flags)}".rstrip())


@config.command(context_settings=dict(ignore_unknown_options=True))
@click.argument('atom')
@click.argument('keywords', nargs=-1)
def keyword(atom, keywords):
    """Accept KEYWORDS (e.g. ~amd64) for ATOM"""
    config_manager, _ = get_config_manager()
    config_manager.set_keywords(atom, list(keywords))
    click.echo(f"package.accept_keywords: {atom} {' '.join(keywords)}".rstrip())


@config.command(context_settings=dict(ignore_unknown_options=True))
@click.argument('atom')
@click.argument('licenses', nargs=-1)
def license(atom, licenses):
    """Accept LICENSES for ATOM"""
    config_manager, _ = get_config_manager()
    config_manager.set_licenses(atom, list(licenses))
    click.echo(f"package.license: {atom} {' '.join(licenses)}".rstrip())


@config.command(context_settings=dict(ignore_unknown_options=True))
@click.argument('key')
@click.argument('value', required=False)
@click.option('--unset', is_flag=True, help='Remove the variable')
def make_conf(key, value, unset):
    """Set a make.conf variable (e.g. MAKEOPTS -j8)"""
    if value is None and not unset:
        raise click.UsageError("VALUE is required unless --unset is given")
    config_manager, _ = get_config_manager()
    try:
        config_manager.set_make_conf(key, None if unset else value)
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Unset {key}" if unset else f'make.conf: {key}="{value}"')


@config.command()
@click.argument('spec')
@click.option('--remove', is_flag=True, help='Remove the mapping for the host port')
def port(spec, remove):
    """Publish a port, SPEC is HOST:CONTAINER[/PROTO]"""
    host, container, protocol = _parse_port(spec)
    config_manager, _ = get_config_manager()
    try:
        if remove:
            config_manager.remove_port(host)
        else:
            config_manager.add_port(host, container, protocol)
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Removed port {host}" if remove else f"Port {host} -> {container}/{protocol}")


@config.command()
@click.argument('spec')
@click.option('--remove', is_flag=True, help='Remove the mount at the container path')
def volume(spec, remove):
    """Bind-mount a host path, SPEC is HOST:CONTAINER[:rw|ro]"""
    config_manager, _ = get_config_manager()
    try:
        if remove:
            container_path = spec.split(':')[1] if ':' in spec else spec
            config_manager.remove_volume(container_path)
            click.echo(f"Removed volume at {container_path}")
            return
        host, container, mode = _parse_volume(spec)
        config_manager.add_volume(host, container, mode)
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Volume {host} -> {container} ({mode})")


@config.command()
@click.argument('key')
@click.argument('value')
def env(key, value):
    """Set environment variable for the image and container"""
    config_manager, _ = get_config_manager()
    try:
        config_manager.update_env_vars({key: value})
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Set environment variable: {key}={value}")


@config.command()
@click.argument('name')
def alias(name):
    """Set the shell alias registered by the enter hook"""
    config_manager, _ = get_config_manager()
    try:
        config_manager.set_alias(name)
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Alias set to '{name}'. Re-run 'gentoo-devenv hook install --force' to apply.")


@config.command()
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
def show(as_json):
    """Display current environment configuration"""
    _, config = get_config_manager()

    if as_json:
        click.echo(json.dumps(config.model_dump(), indent=2))
        return

    console = Console()
    table = Table(title="Environment Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Base image", config.base_image)
    table.add_row("Portage image", config.portage_image)
    table.add_row("Image tag", config.image_tag or "(derived from project)")
    table.add_row("Packages", "\n".join(config.packages) or "-")
    for label, entries in (
        ("package.use", config.portage.package_use),
        ("accept_keywords", config.portage.accept_keywords),
        ("package.license", config.portage.package_license),
    ):
        if entries:
            table.add_row(label, "\n".join(f"{atom} {' '.join(v)}" for atom, v in entries.items()))
    if config.portage.make_conf:
        table.add_row("make.conf", "\n".join(f'{k}="{v}"' for k, v in config.portage.make_conf.items()))
    if config.ports:
        table.add_row("Ports", "\n".join(f"{p.host_port} -> {p.container_key()}" for p in config.ports))
    if config.volumes:
        table.add_row("Volumes", "\n".join(f"{v.host_path} -> {v.container_path} ({v.mode})" for v in config.volumes))
    if config.env_vars:
        table.add_row("Environment", "\n".join(f"{k}={v}" for k, v in config.env_vars.items()))
    table.add_row("Workdir", config.workdir)
    table.add_row("Shell", config.shell)
    table.add_row("Alias", config.alias)
    table.add_row("Hook tool", config.hook_tool)

    console.print(table)


@config.command()
def reset():
    """Reset environment configuration to defaults"""
    _, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)
    config_manager.save_config(EnvironmentConfig())
    click.echo("Environment configuration reset to defaults")


@config.command(name='export')
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path), required=False)
def export_config(path):
    """Write the configuration as YAML (default: devenv.yaml in the project)"""
    project_root, _ = get_project_context()
    config_manager, _ = get_config_manager()
    target = config_manager.export_yaml(path or project_root / EXPORT_FILE_NAME)
    click.echo(f"Exported configuration to {target}")


@config.command(name='import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path), required=False)
def import_config(path):
    """Replace the configuration with a YAML file (default: devenv.yaml)"""
    project_root, data_dir = get_project_context()
    source = path or project_root / EXPORT_FILE_NAME
    if not source.exists():
        fail(f"{source} not found")
    config_manager = ConfigManager(data_dir)
    try:
        config_manager.import_yaml(source)
    except ServiceError as e:
        fail(str(e))
    click.echo(f"Imported configuration from {source}")
