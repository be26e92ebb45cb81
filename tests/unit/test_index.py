"""Unit tests for the staging area."""

import pytest
from gitlet.core.errors import (
    CorruptStagingError, PreconditionError, StateConflictError,
    FILE_MISSING, INVALID_FILE_NAME, NOTHING_TO_REMOVE,
)
from gitlet.core.index import StagingArea, encode_entries, decode_entries
from gitlet.core.objects import Blob
from tests.conftest import make_commit, reopen, write_file


class TestCodec:
    """Staging file encoding."""

    def test_empty(self):
        assert decode_entries(encode_entries({})) == {}

    def test_entries_survive(self):
        entries = {
            'b.txt': Blob('b.txt', b'two'),
            'a/one.txt': Blob('a/one.txt', b'\x00binary\xff'),
        }
        decoded = decode_entries(encode_entries(entries))
        assert decoded == entries
        assert list(decoded) == ['a/one.txt', 'b.txt']

    def test_signature(self):
        assert encode_entries({}).startswith(b'GLST')

    def test_checksum_mismatch(self):
        data = bytearray(encode_entries({'f': Blob('f', b'data')}))
        data[-25] ^= 0xFF
        with pytest.raises(CorruptStagingError, match='checksum'):
            decode_entries(bytes(data))

    def test_truncated(self):
        with pytest.raises(CorruptStagingError):
            decode_entries(b'GLST')


class TestAdd:
    """StagingArea.add"""

    def test_add_new_file(self, repo):
        write_file(repo, 'hello.txt', 'hi')
        assert repo.staging.add(repo, 'hello.txt') is True
        assert repo.staging.additions['hello.txt'].data == b'hi'

    def test_add_persists(self, repo):
        write_file(repo, 'hello.txt', 'hi')
        repo.staging.add(repo, 'hello.txt')
        assert list(reopen(repo).staging.additions) == ['hello.txt']

    def test_add_missing_file(self, repo):
        with pytest.raises(PreconditionError, match=FILE_MISSING):
            repo.staging.add(repo, 'nope.txt')

    def test_add_metadata_file_is_refused(self, repo):
        with pytest.raises(PreconditionError, match=FILE_MISSING):
            repo.staging.add(repo, '.gitlet/HEAD')
        with pytest.raises(PreconditionError, match=FILE_MISSING):
            repo.staging.add(repo, '.gitlet/branches/master')
        assert repo.staging.is_empty()
        assert reopen(repo).staging.is_empty()

    def test_add_name_with_line_break_is_refused(self, repo):
        write_file(repo, 'two\nlines.txt', 'x')
        with pytest.raises(PreconditionError, match=INVALID_FILE_NAME):
            repo.staging.add(repo, 'two\nlines.txt')
        assert repo.staging.is_empty()

    def test_add_replaces_previous_version(self, repo):
        write_file(repo, 'f.txt', 'one')
        repo.staging.add(repo, 'f.txt')
        write_file(repo, 'f.txt', 'two')
        repo.staging.add(repo, 'f.txt')
        assert repo.staging.additions['f.txt'].data == b'two'
        assert len(repo.staging) == 1

    def test_add_unchanged_is_noop(self, repo):
        make_commit(repo, 'add f', {'f.txt': 'same'})
        assert repo.staging.add(repo, 'f.txt') is False
        assert repo.staging.is_empty()

    def test_add_back_to_committed_version_unstages(self, repo):
        make_commit(repo, 'add f', {'f.txt': 'v1'})
        write_file(repo, 'f.txt', 'v2')
        repo.staging.add(repo, 'f.txt')
        write_file(repo, 'f.txt', 'v1')
        repo.staging.add(repo, 'f.txt')
        assert 'f.txt' not in repo.staging.additions

    def test_add_cancels_removal(self, repo):
        make_commit(repo, 'add f', {'f.txt': 'v1'})
        repo.staging.remove(repo, 'f.txt')
        write_file(repo, 'f.txt', 'v1')
        repo.staging.add(repo, 'f.txt')
        assert repo.staging.is_empty()


class TestRemove:
    """StagingArea.remove"""

    def test_remove_untracked_unstaged(self, repo):
        write_file(repo, 'f.txt', 'x')
        with pytest.raises(StateConflictError, match=NOTHING_TO_REMOVE):
            repo.staging.remove(repo, 'f.txt')

    def test_remove_staged_only_unstages(self, repo):
        path = write_file(repo, 'f.txt', 'x')
        repo.staging.add(repo, 'f.txt')
        repo.staging.remove(repo, 'f.txt')
        assert repo.staging.is_empty()
        assert path.exists()

    def test_remove_tracked_stages_and_deletes(self, repo):
        make_commit(repo, 'add f', {'f.txt': 'x'})
        repo.staging.remove(repo, 'f.txt')
        assert list(repo.staging.removals) == ['f.txt']
        assert repo.staging.removals['f.txt'].data == b'x'
        assert not (repo.work_tree / 'f.txt').exists()

    def test_remove_tracked_already_deleted(self, repo):
        make_commit(repo, 'add f', {'f.txt': 'x'})
        (repo.work_tree / 'f.txt').unlink()
        repo.staging.remove(repo, 'f.txt')
        assert 'f.txt' in repo.staging.removals


def test_clear(repo):
    write_file(repo, 'f.txt', 'x')
    repo.staging.add(repo, 'f.txt')
    repo.staging.clear()
    assert repo.staging.is_empty()
    assert len(repo.staging) == 0


def test_read_missing_files_is_empty(repo):
    repo.staged_add_file.unlink()
    repo.staged_rm_file.unlink()
    staging = StagingArea.read(repo)
    assert staging.is_empty()


def test_corrupt_staging_file_is_reported(repo):
    repo.staged_add_file.write_bytes(b'garbage that is long enough to look like a file')
    with pytest.raises(CorruptStagingError):
        StagingArea.read(repo)
