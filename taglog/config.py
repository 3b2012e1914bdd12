#!/usr/bin/env python3

import os
import re
import json
import tomllib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from .exit_codes import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
LOCAL_FILENAMES = ['.taglog.json', '.taglog.toml', '.taglog.yaml', '.taglog.yml']


@dataclass(frozen=True)
class ChangelogOptions:
    """
    Options driving tag reading, commit parsing and extraction.

    Built once from the "options" section of the configuration and passed
    to each component; never mutated afterwards.
    """
    commit_group_by: str = "bugfix.feat.hotfix.fix.feature"
    commit_group_title_maps: Dict[str, str] = field(
        default_factory=lambda: {"fix": "Bugfix", "feat": "Feature"}
    )
    commit_group_sort_by: str = "Title"
    commit_sort_by: str = "Scope"
    commit_filters: Dict[str, List[str]] = field(default_factory=dict)
    tag_filter_pattern: str = ""
    merge_pattern: str = "Merge branch"
    merge_pattern_maps: Tuple[str, ...] = ()
    revert_pattern: str = "Revert"
    revert_pattern_maps: Tuple[str, ...] = ()
    header_pattern: str = r"^(\w*)(?:\(([\w\$\.\-\*\s]*)\))?\:\s(.*)$"
    header_pattern_maps: Tuple[str, ...] = ("type", "scope", "subject")
    note_keywords: Tuple[str, ...] = ("BREAKING CHANGE",)
    issue_prefix: Tuple[str, ...] = ("#",)
    ref_actions: Tuple[str, ...] = ()

    @property
    def group_keys(self) -> List[str]:
        """Classification keys in priority order."""
        return [key for key in self.commit_group_by.split('.') if key]

    @classmethod
    def from_dict(cls, data: Dict) -> 'ChangelogOptions':
        """
        Build options from a config section, validating types and patterns.

        A single string given for a list option counts as a one-item list.

        Raises:
            ConfigError: On unknown keys, wrong value types or invalid patterns
        """
        if not isinstance(data, dict):
            raise ConfigError(f"options must be a mapping, not {type(data).__name__}")

        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown options: {', '.join(sorted(unknown))}")

        values = {}
        for key, value in data.items():
            if key in STR_OPTIONS:
                if not isinstance(value, str):
                    raise ConfigError(f"{key} must be a string, not {type(value).__name__}")
                values[key] = value
            elif key in LIST_OPTIONS:
                values[key] = tuple(_string_list(key, value))
            elif key == 'commit_group_title_maps':
                values[key] = _string_map(key, value)
            elif key == 'commit_filters':
                if not isinstance(value, dict):
                    raise ConfigError(f"{key} must be a mapping, not {type(value).__name__}")
                values[key] = {
                    str(path): _string_list(f"{key}.{path}", allowed)
                    for path, allowed in value.items()
                }

        options = cls(**values)
        for key in ('tag_filter_pattern', 'merge_pattern', 'revert_pattern', 'header_pattern'):
            pattern = getattr(options, key)
            try:
                re.compile(pattern)
            except re.error as e:
                raise ConfigError(f"Invalid regular expression for {key}: {e}") from e
        return options


STR_OPTIONS = ('commit_group_by', 'commit_group_sort_by', 'commit_sort_by', 'tag_filter_pattern',
               'merge_pattern', 'revert_pattern', 'header_pattern')
LIST_OPTIONS = ('merge_pattern_maps', 'revert_pattern_maps', 'header_pattern_maps',
                'note_keywords', 'issue_prefix', 'ref_actions')


def _string_list(key: str, value) -> List[str]:
    """Normalize a list option; a lone string becomes a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)


def _string_map(key: str, value) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ConfigError(f"{key} must be a mapping of strings")
    return dict(value)


def get_config_path(config_path: Optional[str] = None) -> Optional[Path]:
    """Get the path to the configuration file.

    Checks in order:
    1. Explicit path argument
    2. TAGLOG_CONFIG environment variable
    3. .taglog.* in the current directory
    4. ~/.taglog/ directory
    """
    if config_path:
        return Path(config_path).expanduser()

    if 'TAGLOG_CONFIG' in os.environ:
        path = Path(os.environ['TAGLOG_CONFIG']).expanduser()
        if path.exists():
            return path

    for filename in LOCAL_FILENAMES:
        path = Path.cwd() / filename
        if path.exists():
            return path

    taglog_dir = Path.home() / '.taglog'
    for filename in CONFIG_FILENAMES:
        path = taglog_dir / filename
        if path.exists():
            return path

    return None


def _read_config_file(config_path: Path) -> Dict:
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                return tomllib.load(f)
        if suffix in ('.yaml', '.yml'):
            with open(config_path, 'r') as f:
                return yaml.safe_load(f) or {}
        with open(config_path, 'r') as f:
            return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration: defaults, then file, then environment overrides.

    Args:
        config_path: Explicit config file (must exist if given)

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    config = get_default_config()

    path = get_config_path(config_path)
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        file_config = _read_config_file(path)
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config from {path}")
        config = merge_configs(config, file_config)

    return apply_env_overrides(config)


def get_default_config():
    """Get default configuration."""
    defaults = ChangelogOptions()
    return {
        "git": {
            "bin": "git",
            "timeout": 30
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        },
        "options": {
            "commit_group_by": defaults.commit_group_by,
            "commit_group_title_maps": dict(defaults.commit_group_title_maps),
            "commit_group_sort_by": defaults.commit_group_sort_by,
            "commit_sort_by": defaults.commit_sort_by,
            "commit_filters": {},
            "tag_filter_pattern": defaults.tag_filter_pattern,
            "merge_pattern": defaults.merge_pattern,
            "merge_pattern_maps": list(defaults.merge_pattern_maps),
            "revert_pattern": defaults.revert_pattern,
            "revert_pattern_maps": list(defaults.revert_pattern_maps),
            "header_pattern": defaults.header_pattern,
            "header_pattern_maps": list(defaults.header_pattern_maps),
            "note_keywords": list(defaults.note_keywords),
            "issue_prefix": list(defaults.issue_prefix),
            "ref_actions": list(defaults.ref_actions)
        }
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: TAGLOG_SECTION_KEY
    For example: TAGLOG_OPTIONS_COMMIT_SORT_BY=Subject
    """
    env_prefix = "TAGLOG_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == 'TAGLOG_CONFIG':
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    if isinstance(current_level[matched_key], str):
                        typed_value = value
                    current_level[matched_key] = typed_value
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config


def options_from_config(config: Dict) -> ChangelogOptions:
    """Build ChangelogOptions from a loaded configuration dict."""
    return ChangelogOptions.from_dict(config.get('options', {}))
