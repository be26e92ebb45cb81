"""Add command - stage files for the next commit."""

import click
from gitlet.core.repository import Repository


@click.command('add')
@click.argument('file')
def add_cmd(file):
    """
    Stage a file for addition.

    A file whose content matches the current commit is not staged, and
    any pending addition of it is dropped. Adding a file that was staged
    for removal un-stages the removal.

    Examples:
        gitlet add hello.txt
    """
    repo = Repository.open()
    repo.staging.add(repo, repo.relative_name(file))
