"""Glob expansion used for prompt globs and config file references.

The extractor and the prompt selection depend on the GlobExpander interface
so tests can supply canned matches instead of a real directory tree.
"""

import glob
import os
import re
from abc import ABC, abstractmethod
from typing import List

_BRACE_GROUP = re.compile(r"\{([^{}]*,[^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand {a,b} alternatives, which the stdlib glob module does not support

    Examples:
        >>> expand_braces("prompts/*.{json,txt}")
        ['prompts/*.json', 'prompts/*.txt']
        >>> expand_braces("{a,b}/{c,d}")
        ['a/c', 'a/d', 'b/c', 'b/d']
        >>> expand_braces("plain.txt")
        ['plain.txt']
    """
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]

    prefix = pattern[:match.start()]
    suffix = pattern[match.end():]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(prefix + option + suffix))
    return expanded


class GlobExpander(ABC):
    """Expands glob patterns into file paths"""

    @abstractmethod
    def expand(self, pattern: str) -> List[str]:
        """Return the files matching pattern, in a stable order"""

    @abstractmethod
    def has_magic(self, pattern: str) -> bool:
        """Return True if pattern contains glob metacharacters"""


class FilesystemGlobExpander(GlobExpander):
    """GlobExpander backed by the real filesystem

    Supports *, ?, [...], ** (any depth) and {a,b} alternatives. Only
    regular files are returned; relative patterns yield relative paths.
    """

    def expand(self, pattern: str) -> List[str]:
        matches: List[str] = []
        seen = set()
        for alternative in expand_braces(pattern):
            for path in sorted(glob.glob(alternative, recursive=True)):
                if not os.path.isfile(path):
                    continue
                normalized = os.path.normpath(path)
                if normalized not in seen:
                    seen.add(normalized)
                    matches.append(normalized)
        return matches

    def has_magic(self, pattern: str) -> bool:
        return glob.has_magic(pattern) or bool(_BRACE_GROUP.search(pattern))
