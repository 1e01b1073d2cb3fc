"""Builder for creating promptfoo output documents"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional


class EvalOutputBuilder:
    """Fluent interface for promptfoo's JSON output

    Example:
        output = (EvalOutputBuilder()
            .with_passes(3)
            .add_failure("Expected output to contain 'hello'", {"name": "x"})
            .with_share_url("https://promptfoo.app/eval/abc")
            .build())
    """

    def __init__(self):
        self._successes = 0
        self._failures = 0
        self._results: List[Dict[str, Any]] = []
        self._share_url: Optional[str] = None

    def with_passes(self, count: int) -> "EvalOutputBuilder":
        for _ in range(count):
            self._results.append({"success": True, "vars": {}})
        self._successes += count
        return self

    def add_failure(self, error: str, vars: Optional[Dict[str, Any]] = None) -> "EvalOutputBuilder":
        self._results.append({"success": False, "error": error, "vars": vars or {}})
        self._failures += 1
        return self

    def with_share_url(self, url: str) -> "EvalOutputBuilder":
        self._share_url = url
        return self

    def build(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {
            "results": {
                "stats": {"successes": self._successes, "failures": self._failures},
                "results": self._results,
            },
        }
        if self._share_url:
            output["shareableUrl"] = self._share_url
        return output

    def write_to(self, path: Path) -> Path:
        path.write_text(json.dumps(self.build()))
        return path
