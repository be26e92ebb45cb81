"""Shared pytest fixtures for Gitlet tests."""

import logging
import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from gitlet.cli.main import cli
from gitlet.core.config import Config
from gitlet.core.repository import Repository
from gitlet.operations.commit import commit_staged


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.gitletconfig and GITLET_* variables."""
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', tmp_path / '.gitletconfig')
    monkeypatch.delenv('GITLET_INIT_DEFAULTBRANCH', raising=False)
    monkeypatch.delenv('GITLET_CORE_LOGLEVEL', raising=False)
    return tmp_path / '.gitletconfig'


@pytest.fixture(autouse=True)
def reset_gitlet_logger():
    """Drop the stderr handler a CLI invocation leaves on the gitlet logger."""
    yield
    logger = logging.getLogger('gitlet')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def repo_with_commits(repo):
    """Repository with two commits on master after the initial one."""
    make_commit(repo, "First commit", {"file1.txt": "Hello, World!"})
    make_commit(repo, "Second commit", {"file2.txt": "Second file"})
    return repo


def write_file(repo, name, content):
    """
    Write a file into the work tree.

    Args:
        repo: Repository instance
        name: Repository-relative name
        content: str or bytes

    Returns:
        Path: The written file
    """
    path = repo.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode()
    path.write_bytes(content)
    return path


def make_commit(repo, message="Test commit", files=None, removed=()):
    """
    Write files, stage them and commit.

    Args:
        repo: Repository instance
        message: Commit message
        files: Optional dict of name -> content to write and add
        removed: Names to stage for removal

    Returns:
        str: Commit hash
    """
    for name, content in (files or {}).items():
        write_file(repo, name, content)
        repo.staging.add(repo, name)
    for name in removed:
        repo.staging.remove(repo, name)
    return commit_staged(repo, message)


def reopen(repo):
    """Fresh Repository for the same work tree, with nothing cached."""
    return Repository(str(repo.work_tree))


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty directory the CLI runs in."""
    path = tmp_path / 'work'
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def cli_repo(workdir):
    """Repository created with ``gitlet init`` in ``workdir``."""
    gitlet('init')
    return workdir


def gitlet(*args):
    """Run the gitlet CLI in the current directory and return the result."""
    return CliRunner().invoke(cli, list(args))
