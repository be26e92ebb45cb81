"""Unit tests for merge operations."""

import pytest
from gitlet.core.errors import (
    PreconditionError, StateConflictError, UntrackedFileError,
    BRANCH_MISSING, GIVEN_IS_ANCESTOR, MERGE_WITH_SELF, UNCOMMITTED_CHANGES,
)
from gitlet.operations.merge import (
    MergeEngine, MergeResult, conflict_content, CONFLICT_MESSAGE, FAST_FORWARD_MESSAGE,
)
from tests.conftest import make_commit, write_file


def read(repo, name):
    return (repo.work_tree / name).read_text()


def diverge(repo, base, ours, theirs):
    """
    Commit ``base`` on master, branch 'other', then commit ``ours`` on
    master and ``theirs`` on other. Ends on master.

    Each argument is a (files, removed) pair.
    """
    make_commit(repo, 'base', *base)
    repo.refs.create_branch('other')
    make_commit(repo, 'ours', *ours)
    repo.worktree.checkout_branch('other')
    make_commit(repo, 'theirs', *theirs)
    repo.worktree.checkout_branch('master')


def test_merge_engine_initialization(repo):
    """Test MergeEngine initialization."""
    engine = repo.merge
    assert isinstance(engine, MergeEngine)
    assert engine.repo == repo


def test_conflict_content_exact():
    assert conflict_content(b'B', b'C') == b'<<<<<<< HEAD\nB=======\nC>>>>>>>\n'
    assert conflict_content(None, b'C\n') == b'<<<<<<< HEAD\n=======\nC\n>>>>>>>\n'


class TestPreconditions:
    """Checks that run before anything is merged."""

    def test_uncommitted_changes(self, repo):
        repo.refs.create_branch('other')
        write_file(repo, 'f.txt', 'x')
        repo.staging.add(repo, 'f.txt')
        with pytest.raises(StateConflictError, match=UNCOMMITTED_CHANGES):
            repo.merge.merge('other')

    def test_missing_branch(self, repo):
        with pytest.raises(PreconditionError, match=BRANCH_MISSING):
            repo.merge.merge('ghost')

    def test_merge_with_self(self, repo):
        with pytest.raises(StateConflictError, match=MERGE_WITH_SELF):
            repo.merge.merge('master')

    def test_merge_with_branch_at_same_commit(self, repo):
        repo.refs.create_branch('twin')
        with pytest.raises(StateConflictError, match=MERGE_WITH_SELF):
            repo.merge.merge('twin')

    def test_given_is_ancestor(self, repo):
        repo.refs.create_branch('old')
        make_commit(repo, 'ahead', {'f.txt': 'x'})
        with pytest.raises(StateConflictError, match=GIVEN_IS_ANCESTOR):
            repo.merge.merge('old')

    def test_uncommitted_checked_before_branch(self, repo):
        write_file(repo, 'f.txt', 'x')
        repo.staging.add(repo, 'f.txt')
        with pytest.raises(StateConflictError, match=UNCOMMITTED_CHANGES):
            repo.merge.merge('ghost')


def test_fast_forward(repo):
    """Merging a descendant checks it out without a merge commit."""
    repo.refs.create_branch('other')
    repo.worktree.checkout_branch('other')
    tip = make_commit(repo, 'ahead', {'g.txt': 'g'})
    repo.worktree.checkout_branch('master')
    commits_before = repo.objects.all_commit_hashes()

    result = repo.merge.merge('other')

    assert result.is_fast_forward
    assert result.message == FAST_FORWARD_MESSAGE
    assert result.commit_hash == tip
    assert repo.objects.all_commit_hashes() == commits_before
    assert repo.refs.get_current_branch() == 'other'
    assert read(repo, 'g.txt') == 'g'


def test_given_only_change_is_taken(repo):
    diverge(repo,
            ({'f.txt': 'base', 'g.txt': 'g'}, ()),
            ({'mine.txt': 'm'}, ()),
            ({'f.txt': 'theirs'}, ()))

    result = repo.merge.merge('other')

    assert not result.has_conflicts
    assert result.staged_additions == ['f.txt']
    assert read(repo, 'f.txt') == 'theirs'
    assert read(repo, 'mine.txt') == 'm'
    assert read(repo, 'g.txt') == 'g'


def test_merge_commit_shape(repo):
    diverge(repo,
            ({'f.txt': 'base'}, ()),
            ({'mine.txt': 'm'}, ()),
            ({'theirs.txt': 't'}, ()))
    head_before = repo.head_commit_hash()
    given = repo.refs.read_branch('other')

    result = repo.merge.merge('other')

    commit = repo.head_commit()
    assert repo.head_commit_hash() == result.commit_hash
    assert commit.message == 'Merged other into master.'
    assert commit.parent == head_before
    assert commit.second_parent == given
    assert sorted(commit.files) == ['f.txt', 'mine.txt', 'theirs.txt']
    assert repo.staging.is_empty()
    assert repo.refs.get_current_branch() == 'master'


def test_given_deletion_is_applied(repo):
    diverge(repo,
            ({'f.txt': 'base', 'keep.txt': 'k'}, ()),
            ({'mine.txt': 'm'}, ()),
            ({}, ('f.txt',)))

    result = repo.merge.merge('other')

    assert result.staged_removals == ['f.txt']
    assert not (repo.work_tree / 'f.txt').exists()
    assert not repo.head_commit().tracks('f.txt')


def test_current_change_is_kept(repo):
    diverge(repo,
            ({'f.txt': 'base'}, ()),
            ({'f.txt': 'ours'}, ()),
            ({'other.txt': 'o'}, ()))

    repo.merge.merge('other')

    assert read(repo, 'f.txt') == 'ours'
    assert read(repo, 'other.txt') == 'o'


def test_same_change_on_both_sides(repo):
    diverge(repo,
            ({'f.txt': 'base'}, ()),
            ({'f.txt': 'same'}, ()),
            ({'f.txt': 'same', 'x.txt': 'x'}, ()))

    result = repo.merge.merge('other')

    assert not result.has_conflicts
    assert read(repo, 'f.txt') == 'same'


def test_deleted_on_both_sides(repo):
    diverge(repo,
            ({'f.txt': 'base', 'a.txt': 'a'}, ()),
            ({}, ('f.txt',)),
            ({'b.txt': 'b'}, ('f.txt',)))

    result = repo.merge.merge('other')

    assert not result.has_conflicts
    assert not repo.head_commit().tracks('f.txt')


def test_conflict(repo):
    """split A, current B, given C."""
    diverge(repo,
            ({'f.txt': 'A'}, ()),
            ({'f.txt': 'B'}, ()),
            ({'f.txt': 'C'}, ()))

    result = repo.merge.merge('other')

    assert result.has_conflicts
    assert result.message == CONFLICT_MESSAGE
    assert [c.path for c in result.conflicts] == ['f.txt']
    assert result.conflicts[0].base_content == b'A'
    assert read(repo, 'f.txt') == '<<<<<<< HEAD\nB=======\nC>>>>>>>\n'
    # The merge commit is still made, with the conflicted content
    assert repo.head_commit().is_merge


def test_conflict_modified_and_deleted(repo):
    diverge(repo,
            ({'f.txt': 'A'}, ()),
            ({'f.txt': 'B\n'}, ()),
            ({'other.txt': 'o'}, ('f.txt',)))

    result = repo.merge.merge('other')

    assert [c.path for c in result.conflicts] == ['f.txt']
    assert read(repo, 'f.txt') == '<<<<<<< HEAD\nB\n=======\n>>>>>>>\n'


def test_conflict_both_added(repo):
    diverge(repo,
            ({'base.txt': 'b'}, ()),
            ({'new.txt': 'mine\n'}, ()),
            ({'new.txt': 'theirs\n'}, ()))

    result = repo.merge.merge('other')

    assert result.has_conflicts
    assert read(repo, 'new.txt') == '<<<<<<< HEAD\nmine\n=======\ntheirs\n>>>>>>>\n'


def test_untracked_file_blocks_merge(repo):
    diverge(repo,
            ({'base.txt': 'b'}, ()),
            ({'mine.txt': 'm'}, ()),
            ({'new.txt': 'theirs'}, ()))
    write_file(repo, 'new.txt', 'untracked')
    head_before = repo.head_commit_hash()
    commits_before = repo.objects.all_commit_hashes()

    with pytest.raises(UntrackedFileError):
        repo.merge.merge('other')

    assert repo.head_commit_hash() == head_before
    assert repo.objects.all_commit_hashes() == commits_before
    assert read(repo, 'new.txt') == 'untracked'


def test_merge_result_repr():
    assert 'fast-forward' in repr(MergeResult(commit_hash='a' * 40, is_fast_forward=True))
    assert 'conflicts=0' in repr(MergeResult(commit_hash='a' * 40))


def test_blocked_merge_stores_no_conflict_blobs(repo):
    diverge(repo,
            ({'f.txt': 'base\n'}, ()),
            ({'f.txt': 'mine\n'}, ()),
            ({'f.txt': 'theirs\n', 'new.txt': 'theirs'}, ()))
    write_file(repo, 'new.txt', 'untracked')
    blobs_before = sorted(p.name for p in repo.blobs_dir.iterdir())

    with pytest.raises(UntrackedFileError):
        repo.merge.merge('other')

    assert sorted(p.name for p in repo.blobs_dir.iterdir()) == blobs_before
    assert read(repo, 'f.txt') == 'mine\n'


def test_conflict_blob_is_stored_with_merge_commit(repo):
    diverge(repo,
            ({'f.txt': 'base\n'}, ()),
            ({'f.txt': 'mine\n'}, ()),
            ({'f.txt': 'theirs\n'}, ()))

    result = repo.merge.merge('other')

    blob_hash = repo.head_commit().blob_hash('f.txt')
    assert blob_hash == result.conflicts[0].blob().hash
    assert repo.objects.get_blob(blob_hash).data == b'<<<<<<< HEAD\nmine\n=======\ntheirs\n>>>>>>>\n'
