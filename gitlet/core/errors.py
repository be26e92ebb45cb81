"""Gitlet error types.

Every failure a command can hit is a ``GitletError``. The message is the
single line shown to the user; the CLI prints it and exits normally.
"""

NOT_INITIALIZED = "Not in an initialized Gitlet directory."
ALREADY_INITIALIZED = (
    "A Gitlet version-control system already exists in the current directory."
)
INCORRECT_OPERANDS = "Incorrect operands."
NO_COMMAND = "Please enter a command."
UNKNOWN_COMMAND = "No command with that name exists."
EMPTY_MESSAGE = "Please enter a commit message."

FILE_MISSING = "File does not exist."
FILE_NOT_IN_COMMIT = "File does not exist in that commit."
NO_SUCH_COMMIT = "No commit with that id exists."
NO_SUCH_BRANCH = "No such branch exists."
BRANCH_EXISTS = "A branch with that name already exists."
BRANCH_MISSING = "A branch with that name does not exist."
NO_MATCHING_MESSAGE = "Found no commit with that message."
INVALID_BRANCH_NAME = "Invalid branch name."
INVALID_FILE_NAME = "File names cannot contain line breaks."

NOTHING_TO_COMMIT = "No changes added to the commit."
NOTHING_TO_REMOVE = "No reason to remove the file."
REMOVE_CURRENT_BRANCH = "Cannot remove the current branch."
CHECKOUT_CURRENT_BRANCH = "No need to checkout the current branch."
UNTRACKED_IN_THE_WAY = (
    "There is an untracked file in the way; delete it, or add and commit it first."
)
UNCOMMITTED_CHANGES = "You have uncommitted changes."
MERGE_WITH_SELF = "Cannot merge a branch with itself."
GIVEN_IS_ANCESTOR = "Given branch is an ancestor of the current branch."


class GitletError(Exception):
    """Base class for all Gitlet failures."""


class CommandUsageError(GitletError):
    """Wrong operand count, blank commit message, missing or unknown command."""


class PreconditionError(GitletError):
    """Something the command needs does not exist (or already exists)."""


class ObjectNotFoundError(PreconditionError):
    """No object with the requested id is in the store."""

    def __init__(self, object_id: str, message: str = NO_SUCH_COMMIT):
        self.object_id = object_id
        super().__init__(message)


class StateConflictError(GitletError):
    """The repository is in a state that does not allow the operation."""


class UntrackedFileError(StateConflictError):
    """An operation would overwrite a file the current commit does not track.

    Attributes:
        paths: The untracked files that are in the way.
    """

    def __init__(self, paths):
        self.paths = sorted(paths)
        super().__init__(UNTRACKED_IN_THE_WAY)


class CorruptStagingError(GitletError):
    """A staging file failed its signature or checksum verification."""
