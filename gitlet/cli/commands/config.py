"""Config command - manage repository and global configuration."""

import click
from gitlet.core.config import get_config, split_key
from gitlet.core.errors import CommandUsageError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, warning


def _load(is_global: bool):
    if is_global:
        return get_config()
    return get_config(Repository.open())


def _split(name: str):
    try:
        return split_key(name)
    except ValueError as e:
        raise CommandUsageError(str(e))


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        gitlet config set init.defaultbranch main
        gitlet config set --global core.loglevel info
    """
    section, option = _split(key)
    _load(is_global).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Environment variables (GITLET_<SECTION>_<KEY>) take precedence over
    the repository file, which takes precedence over the global file.
    """
    section, option = _split(key)
    repo = None if is_global else Repository.find_repository()
    value = get_config(repo).get(section, option)

    if value is None:
        click.echo(warning(f"{key} is not set"))
    else:
        click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = _split(key)
    if _load(is_global).unset(section, option, global_config=is_global):
        click.echo(success(f"Unset {key}"))
    else:
        click.echo(warning(f"{key} is not set"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """List all config values."""
    repo = None if is_global else Repository.find_repository()
    values = get_config(repo).list_all(global_only=is_global)

    for section in sorted(values):
        for key, value in values[section].items():
            click.echo(f"{section}.{key}={value}")
