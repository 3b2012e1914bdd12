"""
High-level Python API for taglog.

Example:
    import taglog

    # Changelog of the repository in the current directory
    cl = taglog.ChangeLogger()
    for version in cl.get_changelog():
        print(version.tag.name)
        for group in version.commit_groups:
            print("  ", group.title, len(group.commits))

    # A specific repository and query
    cl = taglog.ChangeLogger(repo="~/src/project")
    latest = cl.get_version_changelog("v1.2.0")

    # Explicit configuration
    cl = taglog.ChangeLogger(config={"options": {"commit_group_by": "feat.fix"}})
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from .config import load_config, merge_configs, get_default_config, options_from_config
from .domain import Tag, Version
from .infra import GitClient
from .services import (
    ChangelogService,
    CommitExtractor,
    CommitParser,
    TagReader,
    TagSelector,
)

logger = logging.getLogger(__name__)


class ChangeLogger:
    """
    High-level API for taglog.

    Wires configuration, the git client and the services together.
    """

    def __init__(
        self,
        repo: Optional[str] = None,
        config_path: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None,
        workers: int = 1
    ):
        """
        Initialize ChangeLogger.

        Args:
            repo: Repository directory (default: current directory)
            config_path: Path to config file (default: discovered)
            config: Config dict merged over defaults (skips file lookup)
            git_client: Client to use instead of creating one
            workers: Concurrent revision ranges to parse

        Raises:
            ConfigError: If the configuration is invalid
        """
        if config is not None:
            self._config = merge_configs(get_default_config(), config)
        else:
            self._config = load_config(config_path)

        self.options = options_from_config(self._config)

        git_config = self._config.get('git', {})
        self._git_client = git_client or GitClient(
            cwd=str(Path(repo).expanduser()) if repo else None,
            bin=git_config.get('bin', 'git'),
            timeout=git_config.get('timeout', 30),
        )

        self._tag_reader = TagReader(self._git_client, self.options.tag_filter_pattern)
        self._service = ChangelogService(
            tag_reader=self._tag_reader,
            tag_selector=TagSelector(),
            commit_parser=CommitParser(self._git_client, self.options),
            commit_extractor=CommitExtractor(self.options),
            workers=workers,
        )

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def changelog_service(self) -> ChangelogService:
        return self._service

    def tags(self) -> List[Tag]:
        """All tags, newest first."""
        return self._tag_reader.read_all()

    def get_changelog(self, query: str = "") -> List[Version]:
        """Versions selected by `query` (all tags when empty), newest first."""
        return self._service.get_changelog(query)

    def get_version_changelog(self, query: str = "") -> Version:
        """The newest version selected by `query`."""
        return self._service.get_version_changelog(query)
