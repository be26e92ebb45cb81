"""Initialize a new Gitlet repository."""

import os

import click
from gitlet.core.repository import Repository
from gitlet.cli.output import success


@click.command('init')
def init_cmd():
    """
    Initialize a new Gitlet repository.

    Creates a .gitlet directory in the current directory holding the
    root commit ("initial commit") and a single branch. The branch name
    comes from init.defaultbranch and is master unless configured.

    Examples:
        gitlet init
    """
    repo = Repository(os.getcwd())
    repo.init()
    click.echo(success(f"Initialized empty Gitlet repository in {repo.gitlet_dir}"))
