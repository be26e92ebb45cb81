"""Status computation for Gitlet."""

from dataclasses import dataclass, field
from typing import List
from gitlet.core.objects import Blob


@dataclass
class StatusReport:
    """Snapshot of the repository state shown by ``gitlet status``."""
    current_branch: str
    branches: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    def sections(self):
        """(title, lines) pairs in display order."""
        branch_lines = [
            f"*{name}" if name == self.current_branch else name
            for name in self.branches
        ]
        return [
            ("Branches", branch_lines),
            ("Staged Files", self.staged),
            ("Removed Files", self.removed),
            ("Modifications Not Staged For Commit", self.modified),
            ("Untracked Files", self.untracked),
        ]

    def format(self) -> str:
        """Render the report; every section ends with a blank line."""
        out = []
        for title, lines in self.sections():
            out.append(f"=== {title} ===")
            out.extend(lines)
            out.append("")
        return "\n".join(out) + "\n"


def compute_status(repo) -> StatusReport:
    """
    Compare HEAD, the staging area and the working tree.

    Args:
        repo: Repository instance

    Returns:
        StatusReport with every list sorted
    """
    head = repo.head_commit()
    staging = repo.staging
    worktree = repo.worktree
    working = set(worktree.working_files())

    def working_hash(name):
        return Blob(name, worktree.read_file(name)).hash

    modified = []
    for name, blob_hash in head.files.items():
        if name in staging.additions or name in staging.removals:
            continue
        if name not in working:
            modified.append(f"{name} (deleted)")
        elif working_hash(name) != blob_hash:
            modified.append(f"{name} (modified)")

    for name, blob in staging.additions.items():
        if name not in working:
            modified.append(f"{name} (deleted)")
        elif working_hash(name) != blob.hash:
            modified.append(f"{name} (modified)")

    untracked = [
        name for name in working
        if name in staging.removals
        or (not head.tracks(name) and name not in staging.additions)
    ]

    return StatusReport(
        current_branch=repo.refs.get_current_branch(),
        branches=[name for name, _ in repo.refs.list_branches()],
        staged=sorted(staging.additions),
        removed=sorted(staging.removals),
        modified=sorted(modified),
        untracked=sorted(untracked),
    )
