"""Rm command - unstage a file or stage its removal."""

import click
from gitlet.core.repository import Repository


@click.command('rm')
@click.argument('file')
def rm_cmd(file):
    """
    Unstage a file, and stage it for removal if the current commit tracks it.

    A tracked file is also deleted from the working directory.

    Examples:
        gitlet rm hello.txt
    """
    repo = Repository.open()
    repo.staging.remove(repo, repo.relative_name(file))
