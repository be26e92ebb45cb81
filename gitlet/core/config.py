"""Configuration management for Gitlet.

Repository-local and global settings live in INI files. Only a couple of
keys are read by Gitlet itself (``init.defaultbranch`` and
``core.loglevel``); anything else is stored and listed as-is.
"""

import os
import configparser
import io
from pathlib import Path
from typing import Optional, Dict, Iterator, Tuple
from gitlet.utils.fs import atomic_write_text

DEFAULT_BRANCH = 'master'
ENV_PREFIX = 'GITLET'


class ConfigFile:
    """One INI file, parsed on first use and rewritten whole on change."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._parser = None

    @property
    def parser(self) -> configparser.ConfigParser:
        if self._parser is None:
            self._parser = configparser.ConfigParser()
            if self.path.exists():
                self._parser.read(self.path)
        return self._parser

    def get(self, section: str, key: str) -> Optional[str]:
        if self.parser.has_option(section, key):
            return self.parser.get(section, key)
        return None

    def set(self, section: str, key: str, value: str) -> None:
        if not self.parser.has_section(section):
            self.parser.add_section(section)
        self.parser.set(section, key, value)
        self.save()

    def unset(self, section: str, key: str) -> bool:
        if not self.parser.has_option(section, key):
            return False
        self.parser.remove_option(section, key)
        if not self.parser.options(section):
            self.parser.remove_section(section)
        self.save()
        return True

    def items(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (section, key, value) for every option in file order."""
        for section in self.parser.sections():
            for key, value in self.parser.items(section):
                yield section, key, value

    def save(self) -> None:
        buffer = io.StringIO()
        self.parser.write(buffer)
        atomic_write_text(self.path, buffer.getvalue())

    def __repr__(self) -> str:
        return f"ConfigFile(path={self.path})"


class Config:
    """
    Layered view over the global and repository config files.

    - Global config: ~/.gitletconfig
    - Repository config: .gitlet/config

    Lookups check GITLET_<SECTION>_<KEY> in the environment first, then
    the repository file, then the global file.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.gitletconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: Path to the repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self.global_file = ConfigFile(self.GLOBAL_CONFIG_PATH)
        self.repo_file = ConfigFile(repo_config_path) if repo_config_path else None

    @staticmethod
    def env_name(section: str, key: str) -> str:
        return f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up a value.

        Args:
            section: Config section (e.g., 'init', 'core')
            key: Config key (e.g., 'defaultbranch')
            fallback: Returned when no layer has the key

        Returns:
            The highest-precedence value, or ``fallback``
        """
        value = os.environ.get(self.env_name(section, key))
        if value is not None:
            return value

        for layer in (self.repo_file, self.global_file):
            if layer is None:
                continue
            value = layer.get(section, key)
            if value is not None:
                return value

        return fallback

    def _writable(self, global_config: bool) -> ConfigFile:
        if global_config:
            return self.global_file
        if self.repo_file is None:
            raise ValueError("No repository config path available")
        return self.repo_file

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """Store a value in the repository file, or the global one."""
        self._writable(global_config).set(section, key, value)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a value; empty sections are dropped with it.

        Returns:
            True if value was removed, False if it didn't exist
        """
        return self._writable(global_config).unset(section, key)

    def list_all(self, global_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Collect values per section.

        Global keys are suffixed with `` (global)`` so both layers can be
        shown side by side.
        """
        result = {}

        for section, key, value in self.global_file.items():
            result.setdefault(section, {})[f"{key} (global)"] = value

        if not global_only and self.repo_file is not None:
            for section, key, value in self.repo_file.items():
                result.setdefault(section, {})[key] = value

        return result

    def default_branch(self) -> str:
        """Branch name ``init`` creates."""
        return self.get('init', 'defaultbranch', DEFAULT_BRANCH) or DEFAULT_BRANCH

    def log_level(self) -> Optional[str]:
        """Logging level name from ``core.loglevel``, if set."""
        return self.get('core', 'loglevel')


def split_key(name: str) -> Tuple[str, str]:
    """
    Split a dotted key such as ``init.defaultbranch``.

    Raises:
        ValueError: If either part is missing
    """
    section, _, key = name.partition('.')
    if not section or not key:
        raise ValueError(f"Key must be in the form section.key: {name}")
    return section, key


def get_config(repo=None) -> Config:
    """Config for ``repo``, or global-only when ``repo`` is None."""
    if repo:
        return Config(repo.config_file)
    return Config()
