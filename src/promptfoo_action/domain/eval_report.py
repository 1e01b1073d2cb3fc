"""Domain model for promptfoo's JSON output file."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from promptfoo_action.domain.exceptions import ErrorCodes, EvaluationError


@dataclass(frozen=True)
class FailedResult:
    """One failing test case"""

    error: str
    vars: Optional[Dict[str, Any]] = None


@dataclass
class EvalReport:
    """Parsed summary of a promptfoo evaluation.

    Only the fields the action reports on are kept: success/failure counts,
    failing results and the share URL.
    """

    successes: int
    failures: int
    failed_results: List[FailedResult] = field(default_factory=list)
    share_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EvalReport":
        """Build a report from promptfoo's output JSON

        Raises:
            EvaluationError: If the document lacks results.stats
        """
        results = data.get("results") or {}
        stats = results.get("stats")
        if not isinstance(stats, dict):
            raise EvaluationError(
                "promptfoo output has no results.stats section",
                code=ErrorCodes.INVALID_OUTPUT_FILE,
            )

        failed = [
            FailedResult(error=str(item.get("error") or ""), vars=item.get("vars"))
            for item in results.get("results") or []
            if item.get("success") is not True
        ]

        return cls(
            successes=int(stats.get("successes") or 0),
            failures=int(stats.get("failures") or 0),
            failed_results=failed,
            share_url=data.get("shareableUrl") or None,
        )

    @classmethod
    def from_output_file(cls, file_path: str) -> "EvalReport":
        """Read and parse a promptfoo output file

        Raises:
            EvaluationError: If the file is missing or not valid JSON
        """
        if not file_path or not os.path.exists(file_path):
            raise EvaluationError(
                f"promptfoo output file not found: {file_path}",
                code=ErrorCodes.INVALID_OUTPUT_FILE,
                help_text="Check the promptfoo logs above for the reason the evaluation did not complete.",
            )
        try:
            with open(file_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise EvaluationError(
                f"Invalid JSON in promptfoo output file {file_path}: {e}",
                code=ErrorCodes.INVALID_OUTPUT_FILE,
            )
        return cls.from_dict(data)

    @property
    def total(self) -> int:
        return self.successes + self.failures

    @property
    def pass_rate(self) -> float:
        """Percentage of passing tests (100 when nothing ran)"""
        if self.total == 0:
            return 100.0
        return self.successes / self.total * 100

    def to_markdown(self, title: str) -> str:
        """Render the report as a PR comment / step summary section"""
        lines = [
            f"# {title}",
            "",
            "| Success | Failure | Pass rate |",
            "|---------|---------|-----------|",
            f"| {self.successes} | {self.failures} | {self.pass_rate:.1f}% |",
            "",
        ]
        if self.share_url:
            lines.append(f"**» [View eval results]({self.share_url}) «**")
            lines.append("")

        for result in self.failed_results:
            lines.extend([
                "**🚫 FAILED:**",
                "```",
                result.error,
                "```",
                "",
                "**VARS:**",
                "```",
                json.dumps(result.vars),
                "```",
                "",
                "----------",
                "",
            ])
        return "\n".join(lines)
