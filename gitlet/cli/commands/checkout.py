"""Checkout command - restore files or switch branches."""

import click
from gitlet.core.errors import CommandUsageError, INCORRECT_OPERANDS
from gitlet.core.repository import Repository
from gitlet.cli.output import success

OPERANDS_KEY = 'checkout.operands'


class CheckoutCommand(click.Command):
    """
    Command that keeps its raw operands.

    click's parser swallows a bare ``--``, but checkout needs to see it
    to tell ``-- FILE`` and ``ID -- FILE`` apart from ``BRANCH``.
    """

    def parse_args(self, ctx, args):
        ctx.meta[OPERANDS_KEY] = list(args)
        return super().parse_args(ctx, args)


@click.command('checkout', cls=CheckoutCommand,
               context_settings={'ignore_unknown_options': True})
@click.argument('operands', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def checkout_cmd(ctx, operands):
    """
    Restore a file, or switch to a branch.

    \b
    Forms:
        gitlet checkout -- FILE           restore FILE from the current commit
        gitlet checkout ID -- FILE        restore FILE from commit ID
        gitlet checkout BRANCH            switch to BRANCH

    Restoring a file overwrites the working copy and stages nothing.
    Switching branches replaces the tracked files and clears the
    staging area.
    """
    operands = ctx.meta.get(OPERANDS_KEY, list(operands))

    if len(operands) == 2 and operands[0] == '--':
        repo = Repository.open()
        repo.worktree.checkout_file(repo.relative_name(operands[1]))
    elif len(operands) == 3 and operands[1] == '--':
        repo = Repository.open()
        repo.worktree.checkout_file(repo.relative_name(operands[2]), operands[0])
    elif len(operands) == 1 and operands[0] != '--':
        repo = Repository.open()
        repo.worktree.checkout_branch(operands[0])
        click.echo(success(f"Switched to branch '{operands[0]}'"))
    else:
        raise CommandUsageError(INCORRECT_OPERANDS)
