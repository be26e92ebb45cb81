"""Operations module for high-level Gitlet operations.

This module contains the business logic for Gitlet operations like:
- Commit graph traversal and split points
- Commit creation and history queries
- Checkout and reset
- Merge algorithms
- Status computation
"""

from gitlet.operations.graph import CommitGraph
from gitlet.operations.commit import commit_staged, find_commits, all_commits
from gitlet.operations.checkout import WorkingTree
from gitlet.operations.merge import MergeEngine, MergeResult, MergeConflict
from gitlet.operations.status import StatusReport, compute_status

__all__ = [
    'CommitGraph',
    'commit_staged', 'find_commits', 'all_commits',
    'WorkingTree',
    'MergeEngine', 'MergeResult', 'MergeConflict',
    'StatusReport', 'compute_status',
]
