"""Change set produced by the change-set resolver"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from promptfoo_action.domain.outcomes import Degraded


@dataclass(frozen=True)
class ChangeSet:
    """Files considered modified for the current trigger.

    Attributes:
        files: Paths relative to the working directory, in git's output order
        resolved: True when a real diff (or explicit override) produced `files`.
            False means the comparison was unavailable and every candidate
            file should be processed.
        degraded: Warning explaining why the comparison was unavailable

    Examples:
        >>> ChangeSet.from_diff("a.txt\\nb.txt\\n").files
        ('a.txt', 'b.txt')
        >>> ChangeSet.unresolved("no base").resolved
        False
    """

    files: Tuple[str, ...] = field(default_factory=tuple)
    resolved: bool = True
    degraded: Optional[Degraded] = None

    @classmethod
    def from_diff(cls, output: str) -> "ChangeSet":
        """Build a resolved change set from `git diff --name-only` output"""
        return cls(files=tuple(line.strip() for line in output.split("\n") if line.strip()))

    @classmethod
    def from_override(cls, files: Iterable[str]) -> "ChangeSet":
        """Build a resolved change set from an explicit file list"""
        return cls(files=tuple(files))

    @classmethod
    def unresolved(cls, warning: Optional[str] = None) -> "ChangeSet":
        """Build an empty change set for degraded mode"""
        return cls(
            files=(),
            resolved=False,
            degraded=Degraded(warning) if warning else None,
        )

    def __contains__(self, path: str) -> bool:
        return path in self.files

    def __len__(self) -> int:
        return len(self.files)
