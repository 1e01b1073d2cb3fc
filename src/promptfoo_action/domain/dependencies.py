"""File dependencies declared by a promptfoo config"""

from dataclasses import dataclass
from enum import Enum


class DependencyKind(Enum):
    """How a dependency is compared against changed files"""
    FILE_PATH = "file"
    WATCH_ROOT = "watch_root"


@dataclass(frozen=True)
class ConfigDependency:
    """A file or directory the evaluation config depends on.

    Paths are relative to the process working directory, the same origin as
    the change set they are compared against. A watch root may keep a
    trailing "/" when the config referenced it that way.

    Attributes:
        kind: FILE_PATH or WATCH_ROOT
        path: Working-directory-relative path
    """

    kind: DependencyKind
    path: str

    @classmethod
    def file(cls, path: str) -> "ConfigDependency":
        return cls(DependencyKind.FILE_PATH, path)

    @classmethod
    def watch_root(cls, path: str) -> "ConfigDependency":
        return cls(DependencyKind.WATCH_ROOT, path)

    @property
    def is_watch_root(self) -> bool:
        return self.kind == DependencyKind.WATCH_ROOT

    def matches(self, changed_path: str) -> bool:
        """Check whether a changed file touches this dependency.

        File dependencies match verbatim. Watch roots match any path inside
        the directory, compared segment by segment so that "providers" does
        not match "providers-old/a.py".

        Examples:
            >>> ConfigDependency.watch_root("providers/").matches("providers/a.py")
            True
            >>> ConfigDependency.watch_root("providers").matches("providers-old/a.py")
            False
            >>> ConfigDependency.file("data/x.json").matches("data/x.json")
            True
        """
        if not self.is_watch_root:
            return changed_path == self.path

        root = self.path.rstrip("/")
        if root in ("", "."):
            return True
        return changed_path == root or changed_path.startswith(root + "/")
