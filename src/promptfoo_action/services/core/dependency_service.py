"""Core service for extracting file dependencies from a promptfoo config.

Follows Service Layer pattern (Fowler, PoEAA) - encapsulates the rules for
finding `file://` references in a config and turning them into paths that
can be compared against a change set.

References are resolved relative to the config file's directory, then
rewritten relative to the working directory. Glob references contribute
every current match plus the glob-free base directory as a watch root, so
that files added later under that directory still count as changes.
"""

import logging
import os
from typing import Any, Dict, Iterable, Optional, Set

import yaml

from promptfoo_action.domain.constants import FILE_SCHEME
from promptfoo_action.domain.dependencies import ConfigDependency, DependencyKind
from promptfoo_action.infrastructure.filesystem.glob_expander import (
    FilesystemGlobExpander,
    GlobExpander,
)

logger = logging.getLogger(__name__)


class DependencyService:
    """Core service for config dependency extraction"""

    def __init__(self, glob_expander: Optional[GlobExpander] = None, cwd: Optional[str] = None):
        """Initialize DependencyService

        Args:
            glob_expander: Glob implementation (defaults to the filesystem)
            cwd: Directory results are made relative to (defaults to os.getcwd())
        """
        self.glob_expander = glob_expander or FilesystemGlobExpander()
        self.cwd = cwd

    # Public API methods

    def extract(self, config_path: str) -> Set[ConfigDependency]:
        """Extract every file dependency a config declares.

        Looks at providers, prompts, defaultTest and tests (vars and assert
        values). A missing or malformed config logs a warning and yields an
        empty set; it never raises.

        Args:
            config_path: Path to the promptfoo config file

        Returns:
            Deduplicated set of ConfigDependency, relative to the working directory
        """
        cwd = self.cwd or os.getcwd()
        absolute_config = os.path.normpath(os.path.join(cwd, config_path))

        try:
            with open(absolute_config, "r") as f:
                config = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("Failed to extract dependencies from config: %s", e)
            return set()

        if not isinstance(config, dict):
            logger.debug("Config file is empty or not a mapping: %s", config_path)
            return set()

        collector = _DependencyCollector(
            config_dir=os.path.dirname(absolute_config),
            glob_expander=self.glob_expander,
        )

        # Each section may also be a single `file://` string
        for section in ("providers", "prompts", "tests"):
            if isinstance(config.get(section), str):
                collector.add_reference(config[section])

        for provider in _as_list(config.get("providers")):
            if isinstance(provider, str):
                collector.add_reference(provider)
            elif isinstance(provider, dict) and isinstance(provider.get("id"), str):
                collector.add_reference(provider["id"])

        for prompt in _as_list(config.get("prompts")):
            if isinstance(prompt, str):
                collector.add_reference(prompt)
            elif isinstance(prompt, dict):
                collector.add_file_object(prompt)

        default_test = config.get("defaultTest")
        if isinstance(default_test, dict):
            collector.add_test(default_test)

        for test in _as_list(config.get("tests")):
            if isinstance(test, dict):
                collector.add_test(test)
            elif isinstance(test, str):
                collector.add_reference(test)

        return collector.relative_to(cwd)


class _DependencyCollector:
    """Accumulates absolute dependency paths for one config"""

    def __init__(self, config_dir: str, glob_expander: GlobExpander):
        self.config_dir = config_dir
        self.glob_expander = glob_expander
        self.paths: Dict[str, DependencyKind] = {}

    def add(self, path: str, kind: DependencyKind) -> None:
        # A path seen as both file and directory is watched as a directory
        if self.paths.get(path) != DependencyKind.WATCH_ROOT:
            self.paths[path] = kind

    def add_reference(self, reference: str) -> None:
        """Resolve a `file://` string; anything else is ignored"""
        if not reference.startswith(FILE_SCHEME):
            return

        file_path = reference[len(FILE_SCHEME):]
        absolute_path = os.path.join(self.config_dir, file_path)

        if self.glob_expander.has_magic(file_path):
            for match in self.glob_expander.expand(absolute_path):
                self.add(os.path.normpath(match), DependencyKind.FILE_PATH)
            base_path = _glob_base(file_path, self.glob_expander)
            if base_path:
                self.add(os.path.normpath(os.path.join(self.config_dir, base_path)), DependencyKind.WATCH_ROOT)
        elif os.path.isdir(absolute_path):
            normalized = os.path.normpath(absolute_path)
            if reference.endswith("/"):
                normalized += "/"
            self.add(normalized, DependencyKind.WATCH_ROOT)
        else:
            self.add(os.path.normpath(absolute_path), DependencyKind.FILE_PATH)

    def add_file_object(self, value: Dict[str, Any]) -> None:
        """Resolve an object of the form {file: path}"""
        file_path = value.get("file")
        if isinstance(file_path, str) and file_path:
            self.add(os.path.normpath(os.path.join(self.config_dir, file_path)), DependencyKind.FILE_PATH)

    def add_value(self, value: Any) -> None:
        if isinstance(value, str):
            self.add_reference(value)
        elif isinstance(value, dict):
            self.add_file_object(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, str):
                    self.add_reference(item)

    def add_test(self, test: Dict[str, Any]) -> None:
        variables = test.get("vars")
        if isinstance(variables, dict):
            for value in variables.values():
                self.add_value(value)
        elif isinstance(variables, str):
            self.add_reference(variables)

        for assertion in _as_list(test.get("assert")):
            if isinstance(assertion, dict):
                self.add_value(assertion.get("value"))

    def relative_to(self, cwd: str) -> Set[ConfigDependency]:
        dependencies = set()
        for path, kind in self.paths.items():
            relative = os.path.relpath(path.rstrip("/") or "/", cwd)
            if path.endswith("/") and not relative.endswith("/"):
                relative += "/"
            dependencies.add(ConfigDependency(kind, relative))
        return dependencies


def _glob_base(file_path: str, glob_expander: GlobExpander) -> str:
    """Longest leading run of path segments without glob metacharacters

    Examples:
        >>> _glob_base("providers/**/*.py", FilesystemGlobExpander())
        'providers'
        >>> _glob_base("*.py", FilesystemGlobExpander())
        ''
    """
    segments = []
    for part in file_path.split("/"):
        if glob_expander.has_magic(part):
            break
        segments.append(part)
    return "/".join(segments)


def _as_list(value: Any) -> Iterable[Any]:
    if isinstance(value, list):
        return value
    return []
