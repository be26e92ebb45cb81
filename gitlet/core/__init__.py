"""Core functionality for Gitlet.

This module contains the core data structures:
- Gitlet objects (Blob, Commit)
- Object store
- Repository management
- Staging area
- Branch and HEAD management
- Configuration management
- Error types

For operations like commit, checkout, merge and status, see gitlet.operations
"""

from gitlet.core.objects import GitletObject, Blob, Commit
from gitlet.core.store import ObjectStore
from gitlet.core.repository import Repository
from gitlet.core.hash import hash_object
from gitlet.core.index import StagingArea
from gitlet.core.refs import RefManager
from gitlet.core.config import Config, get_config
from gitlet.core.errors import (
    GitletError, CommandUsageError, PreconditionError, ObjectNotFoundError,
    StateConflictError, UntrackedFileError, CorruptStagingError,
)

__all__ = [
    'GitletObject',
    'Blob',
    'Commit',
    'ObjectStore',
    'Repository',
    'StagingArea',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
    'GitletError',
    'CommandUsageError',
    'PreconditionError',
    'ObjectNotFoundError',
    'StateConflictError',
    'UntrackedFileError',
    'CorruptStagingError',
]
