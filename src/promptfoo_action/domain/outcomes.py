"""Outcome values that separate fatal failures from degraded runs.

A `Fatal` stops the action with a non-zero exit code. A `Degraded` is a
warning attached to an otherwise successful result: the run continues with
reduced precision (for example, every prompt file is evaluated because no
diff could be computed).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Fatal:
    """A failure that aborts the run

    Attributes:
        code: Stable error code (see ErrorCodes)
        message: Human-readable description
        hint: Optional remediation hint
    """

    code: str
    message: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class Degraded:
    """A non-fatal condition that reduces precision but lets the run continue"""

    warning: str
